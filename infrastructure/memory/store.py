"""
In-memory implementation of all repositories.

Used by the test suite and by `STORAGE_BACKEND=memory` for local development.
Reads yield to the event loop like a network round-trip would, so concurrent
callers interleave the way they do against the real store. Conditional
writes check and mutate without a suspension point, which makes them atomic
on a single event loop.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, List
from uuid import UUID, uuid4
from core.domain.models import (
    User, UserCreate, UserUpdate,
    Reward,
    Claim, ClaimWithReward,
    ActivityCreate, ActivityEntry,
    Tournament, Participation,
)
from core.domain.errors import ConflictError, NotFoundError, StaleStateError, ValidationError
from core.interfaces.repositories import (
    IUserRepository, IRewardRepository, IClaimRepository, IActivityRepository, ITournamentRepository,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Shared tables for the in-memory repositories"""

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self.users: Dict[UUID, User] = {}
        self.rewards: Dict[UUID, Reward] = {}
        self.claims: List[Claim] = []
        self.activity: List[ActivityEntry] = []
        self.tournaments: Dict[UUID, Tournament] = {}
        self.participations: List[Participation] = []

    async def io(self) -> None:
        """Stand-in for a storage round-trip"""
        await asyncio.sleep(self.latency)

    # === Seeding helpers (administrative writes are not part of the ports) ===

    def add_reward(self, **fields) -> Reward:
        fields.setdefault("id", uuid4())
        fields.setdefault("created_at", _now())
        reward = Reward(**fields)
        self.rewards[reward.id] = reward
        return reward

    def add_tournament(self, **fields) -> Tournament:
        fields.setdefault("id", uuid4())
        fields.setdefault("created_at", _now())
        tournament = Tournament(**fields)
        self.tournaments[tournament.id] = tournament
        return tournament


class MemoryUserRepository(IUserRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        await self.store.io()
        user = self.store.users.get(user_id)
        return user.model_copy() if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        await self.store.io()
        for user in self.store.users.values():
            if user.email == email:
                return user.model_copy()
        return None

    async def create(self, user_data: UserCreate) -> User:
        await self.store.io()
        for existing in self.store.users.values():
            if existing.email == user_data.email or existing.username == user_data.username:
                raise ConflictError("Record already exists")
        now = _now()
        user = User(id=uuid4(), created_at=now, updated_at=now, **user_data.model_dump())
        self.store.users[user.id] = user
        return user.model_copy()

    async def update(self, user_id: UUID, user_data: UserUpdate) -> Optional[User]:
        await self.store.io()
        user = self.store.users.get(user_id)
        if not user:
            return None
        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)
        if "username" in changes:
            for other in self.store.users.values():
                if other.id != user_id and other.username == changes["username"]:
                    raise ConflictError("Record already exists")
        updated = user.model_copy(update={**changes, "updated_at": _now()})
        self.store.users[user_id] = updated
        return updated.model_copy()

    async def update_points(self, user_id: UUID, expected_points: int, new_points: int) -> User:
        if new_points < 0:
            raise ValidationError("Balance cannot go negative")
        await self.store.io()
        user = self.store.users.get(user_id)
        if not user:
            raise NotFoundError("user")
        if user.points != expected_points:
            raise StaleStateError(f"Points for user {user_id} changed concurrently")
        updated = user.model_copy(update={"points": new_points, "updated_at": _now()})
        self.store.users[user_id] = updated
        return updated.model_copy()

    async def ping(self) -> bool:
        return True


class MemoryRewardRepository(IRewardRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_by_id(self, reward_id: UUID) -> Optional[Reward]:
        await self.store.io()
        reward = self.store.rewards.get(reward_id)
        return reward.model_copy() if reward else None

    async def list_active(self) -> List[Reward]:
        await self.store.io()
        active = [r for r in self.store.rewards.values() if r.is_active]
        return [r.model_copy() for r in sorted(active, key=lambda r: r.points_required)]

    async def decrement_stock(self, reward_id: UUID, expected_stock: int) -> Reward:
        await self.store.io()
        reward = self.store.rewards.get(reward_id)
        if not reward or not reward.is_active or reward.stock != expected_stock or reward.stock <= 0:
            raise StaleStateError(f"Stock for reward {reward_id} changed concurrently")
        updated = reward.model_copy(update={"stock": reward.stock - 1, "updated_at": _now()})
        self.store.rewards[reward_id] = updated
        return updated.model_copy()


class MemoryClaimRepository(IClaimRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    async def commit_claim(
        self,
        claim_id: UUID,
        user_id: UUID,
        reward_id: UUID,
        cost: int,
        expected_stock: int,
        expected_points: int,
    ) -> Claim:
        await self.store.io()
        reward = self.store.rewards.get(reward_id)
        if (not reward or not reward.is_active or reward.points_required != cost
                or reward.stock != expected_stock or reward.stock <= 0):
            raise StaleStateError(f"Reward {reward_id} changed concurrently")
        user = self.store.users.get(user_id)
        if not user or user.points != expected_points or user.points < cost:
            raise StaleStateError(f"Points for user {user_id} changed concurrently")
        if any(c.id == claim_id for c in self.store.claims):
            raise ConflictError("Record already exists")

        now = _now()
        self.store.rewards[reward_id] = reward.model_copy(update={"stock": reward.stock - 1, "updated_at": now})
        self.store.users[user_id] = user.model_copy(update={"points": user.points - cost, "updated_at": now})
        claim = Claim(id=claim_id, user_id=user_id, reward_id=reward_id, redeemed_at=now)
        self.store.claims.append(claim)
        return claim.model_copy()

    async def get_by_id(self, claim_id: UUID) -> Optional[Claim]:
        await self.store.io()
        for claim in self.store.claims:
            if claim.id == claim_id:
                return claim.model_copy()
        return None

    async def list_for_user(self, user_id: UUID) -> List[ClaimWithReward]:
        await self.store.io()
        claims = [c for c in reversed(self.store.claims) if c.user_id == user_id]
        return [
            ClaimWithReward(**c.model_dump(), reward=self.store.rewards.get(c.reward_id))
            for c in claims
        ]

    async def count_for_user(self, user_id: UUID) -> int:
        await self.store.io()
        return sum(1 for c in self.store.claims if c.user_id == user_id)


class MemoryActivityRepository(IActivityRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    async def append(self, entry: ActivityCreate) -> ActivityEntry:
        await self.store.io()
        record = ActivityEntry(id=uuid4(), created_at=_now(), **entry.model_dump())
        self.store.activity.append(record)
        return record.model_copy()

    async def list_for_user(self, user_id: UUID, limit: int = 10) -> List[ActivityEntry]:
        await self.store.io()
        entries = [e for e in reversed(self.store.activity) if e.user_id == user_id]
        return [e.model_copy() for e in entries[:limit]]


class MemoryTournamentRepository(ITournamentRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_all(self) -> List[Tournament]:
        await self.store.io()
        return [t.model_copy() for t in sorted(self.store.tournaments.values(), key=lambda t: t.start_date)]

    async def get_by_id(self, tournament_id: UUID) -> Optional[Tournament]:
        await self.store.io()
        tournament = self.store.tournaments.get(tournament_id)
        return tournament.model_copy() if tournament else None

    async def count_participants(self, tournament_id: UUID) -> int:
        await self.store.io()
        return sum(1 for p in self.store.participations if p.tournament_id == tournament_id)

    async def add_participant(self, tournament_id: UUID, user_id: UUID) -> Participation:
        await self.store.io()
        for p in self.store.participations:
            if p.tournament_id == tournament_id and p.user_id == user_id:
                raise ConflictError("Already joined this tournament")
        participation = Participation(id=uuid4(), user_id=user_id, tournament_id=tournament_id, joined_at=_now())
        self.store.participations.append(participation)
        return participation.model_copy()

    async def list_for_user(self, user_id: UUID) -> List[Participation]:
        await self.store.io()
        mine = [p for p in reversed(self.store.participations) if p.user_id == user_id]
        return [p.model_copy(update={"tournament": self.store.tournaments.get(p.tournament_id)}) for p in mine]
