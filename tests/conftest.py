"""Shared fixtures: memory-backed services with fast bcrypt."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from config.settings import Settings
from core.domain.models import User, UserRole
from adapters.api.loader import build_services
from infrastructure.memory import (
    MemoryStore,
    MemoryUserRepository,
    MemoryRewardRepository,
    MemoryClaimRepository,
    MemoryActivityRepository,
    MemoryTournamentRepository,
)

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    return Settings(
        storage_backend="memory",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        _env_file=None,
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def repos(store):
    return {
        "user_repo": MemoryUserRepository(store),
        "reward_repo": MemoryRewardRepository(store),
        "claim_repo": MemoryClaimRepository(store),
        "activity_repo": MemoryActivityRepository(store),
        "tournament_repo": MemoryTournamentRepository(store),
    }


@pytest.fixture
def services(settings, repos):
    return build_services(settings, repos=repos)


@pytest.fixture
def make_user(store):
    """Insert a user straight into the store (no hashing, no activity)"""
    def _make(points: int = 0, role: UserRole = UserRole.USER, username: str = None) -> User:
        now = datetime.now(timezone.utc)
        username = username or f"player_{uuid4().hex[:8]}"
        user = User(
            id=uuid4(),
            username=username,
            email=f"{username}@example.com",
            password="not-a-hash",
            role=role,
            points=points,
            created_at=now,
            updated_at=now,
        )
        store.users[user.id] = user
        return user
    return _make


@pytest.fixture
def make_reward(store):
    def _make(points_required: int = 500, stock: int = 1, **fields):
        fields.setdefault("title", "Gaming Mouse")
        return store.add_reward(points_required=points_required, stock=stock, **fields)
    return _make


@pytest.fixture
def make_tournament(store):
    def _make(**fields):
        fields.setdefault("title", "Valorant Pro Series")
        fields.setdefault("game_name", "Valorant")
        fields.setdefault("start_date", datetime(2026, 3, 5, 19, tzinfo=timezone.utc))
        fields.setdefault("end_date", datetime(2026, 3, 5, 23, tzinfo=timezone.utc))
        return store.add_tournament(**fields)
    return _make
