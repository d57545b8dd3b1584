from infrastructure.catalog import SAMPLE_REWARDS, SAMPLE_TOURNAMENTS
from infrastructure.memory.store import (
    MemoryStore,
    MemoryUserRepository,
    MemoryRewardRepository,
    MemoryClaimRepository,
    MemoryActivityRepository,
    MemoryTournamentRepository,
)


def seed_catalog(store: MemoryStore) -> None:
    """Load the sample rewards and tournaments"""
    for reward in SAMPLE_REWARDS:
        store.add_reward(**reward)
    for tournament in SAMPLE_TOURNAMENTS:
        store.add_tournament(**tournament)


__all__ = [
    "MemoryStore",
    "MemoryUserRepository",
    "MemoryRewardRepository",
    "MemoryClaimRepository",
    "MemoryActivityRepository",
    "MemoryTournamentRepository",
    "seed_catalog",
]
