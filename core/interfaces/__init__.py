from core.interfaces.repositories import (
    IUserRepository,
    IRewardRepository,
    IClaimRepository,
    IActivityRepository,
    ITournamentRepository,
)
from core.interfaces.security import IPasswordHasher, ITokenService

__all__ = [
    # Repositories
    "IUserRepository",
    "IRewardRepository",
    "IClaimRepository",
    "IActivityRepository",
    "ITournamentRepository",
    # Security
    "IPasswordHasher",
    "ITokenService",
]
