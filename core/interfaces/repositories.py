"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase -> in-memory -> plain PostgreSQL, etc.)

Conditional writes (`update_points`, `commit_claim`) are the only way the
points balance and reward stock change. They must be atomic at the storage
layer and raise StaleStateError when the expected value no longer matches.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID
from core.domain.models import (
    User, UserCreate, UserUpdate,
    Reward,
    Claim, ClaimWithReward,
    ActivityCreate, ActivityEntry,
    Tournament, Participation,
)


class IUserRepository(ABC):
    """Interface for user data access"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by internal ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email"""
        pass

    @abstractmethod
    async def create(self, user_data: UserCreate) -> User:
        """Create a new user. ConflictError if email or username is taken."""
        pass

    @abstractmethod
    async def update(self, user_id: UUID, user_data: UserUpdate) -> Optional[User]:
        """Update profile fields"""
        pass

    @abstractmethod
    async def update_points(self, user_id: UUID, expected_points: int, new_points: int) -> User:
        """Compare-and-set the points balance.

        Raises NotFoundError if the user is gone, StaleStateError if the
        stored balance differs from `expected_points`.
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Cheap connectivity check"""
        pass


class IRewardRepository(ABC):
    """Interface for reward data access"""

    @abstractmethod
    async def get_by_id(self, reward_id: UUID) -> Optional[Reward]:
        pass

    @abstractmethod
    async def list_active(self) -> List[Reward]:
        """Active rewards, cheapest first"""
        pass

    @abstractmethod
    async def decrement_stock(self, reward_id: UUID, expected_stock: int) -> Reward:
        """Take one unit if the active reward still has `expected_stock` units.

        Raises StaleStateError on mismatch. The claim path uses
        IClaimRepository.commit_claim, which applies this same condition.
        """
        pass


class IClaimRepository(ABC):
    """Interface for claim records (user_rewards)"""

    @abstractmethod
    async def commit_claim(
        self,
        claim_id: UUID,
        user_id: UUID,
        reward_id: UUID,
        cost: int,
        expected_stock: int,
        expected_points: int,
    ) -> Claim:
        """Take one unit of stock, debit `cost` points and insert the claim, all or nothing.

        Conditional on the reward still being active with `expected_stock`
        units at price `cost`, and on the user still holding
        `expected_points`. Raises StaleStateError otherwise, with nothing
        written.
        """
        pass

    @abstractmethod
    async def get_by_id(self, claim_id: UUID) -> Optional[Claim]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[ClaimWithReward]:
        """User's claims joined with reward, newest first"""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: UUID) -> int:
        pass


class IActivityRepository(ABC):
    """Append-only activity log"""

    @abstractmethod
    async def append(self, entry: ActivityCreate) -> ActivityEntry:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID, limit: int = 10) -> List[ActivityEntry]:
        """Newest first"""
        pass


class ITournamentRepository(ABC):
    """Interface for tournament data access"""

    @abstractmethod
    async def list_all(self) -> List[Tournament]:
        """All tournaments ordered by start date"""
        pass

    @abstractmethod
    async def get_by_id(self, tournament_id: UUID) -> Optional[Tournament]:
        pass

    @abstractmethod
    async def count_participants(self, tournament_id: UUID) -> int:
        pass

    @abstractmethod
    async def add_participant(self, tournament_id: UUID, user_id: UUID) -> Participation:
        """Register user. ConflictError if already registered."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[Participation]:
        """User's participations joined with tournament, newest first"""
        pass
