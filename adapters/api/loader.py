"""
API loader - builds repositories and services for the configured storage backend.
"""

import logging
from dataclasses import dataclass
from config.settings import Settings

# Core services
from core.interfaces.repositories import IUserRepository
from core.services import (
    ActivityService,
    PointsLedger,
    AuthService,
    RewardService,
    TournamentService,
    UserService,
)

# Infrastructure
from infrastructure.security import BcryptPasswordHasher, JwtTokenService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the HTTP handlers need"""
    user_repo: IUserRepository
    activity: ActivityService
    ledger: PointsLedger
    auth: AuthService
    rewards: RewardService
    tournaments: TournamentService
    users: UserService


def build_repositories(settings: Settings) -> dict:
    """Repository set for `settings.storage_backend`"""
    if settings.storage_backend == "memory":
        from infrastructure.memory import (
            MemoryStore,
            MemoryUserRepository,
            MemoryRewardRepository,
            MemoryClaimRepository,
            MemoryActivityRepository,
            MemoryTournamentRepository,
            seed_catalog,
        )
        store = MemoryStore()
        if settings.seed_memory_catalog:
            seed_catalog(store)
        logger.warning("Using in-memory storage - data is lost on restart")
        return {
            "user_repo": MemoryUserRepository(store),
            "reward_repo": MemoryRewardRepository(store),
            "claim_repo": MemoryClaimRepository(store),
            "activity_repo": MemoryActivityRepository(store),
            "tournament_repo": MemoryTournamentRepository(store),
        }

    from infrastructure.database import (
        create_supabase_client,
        SupabaseUserRepository,
        SupabaseRewardRepository,
        SupabaseClaimRepository,
        SupabaseActivityRepository,
        SupabaseTournamentRepository,
    )
    client = create_supabase_client(settings)
    logger.info(f"Using Supabase storage (schema={settings.db_schema})")
    return {
        "user_repo": SupabaseUserRepository(client),
        "reward_repo": SupabaseRewardRepository(client),
        "claim_repo": SupabaseClaimRepository(client),
        "activity_repo": SupabaseActivityRepository(client),
        "tournament_repo": SupabaseTournamentRepository(client),
    }


def build_services(settings: Settings, repos: dict = None) -> Services:
    """Wire services on top of `repos` (built from settings when omitted)"""
    repos = repos or build_repositories(settings)
    user_repo = repos["user_repo"]

    # === SECURITY ===
    hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_days=settings.token_ttl_days,
    )

    # === BUSINESS SERVICES ===
    activity = ActivityService(activity_repo=repos["activity_repo"])
    ledger = PointsLedger(user_repo=user_repo, activity=activity)
    auth = AuthService(
        user_repo=user_repo,
        hasher=hasher,
        tokens=tokens,
        activity=activity,
        welcome_bonus=settings.welcome_bonus,
    )
    rewards = RewardService(
        user_repo=user_repo,
        reward_repo=repos["reward_repo"],
        claim_repo=repos["claim_repo"],
        activity=activity,
        max_attempts=settings.claim_retry_attempts,
    )
    tournaments = TournamentService(
        tournament_repo=repos["tournament_repo"],
        user_repo=user_repo,
        ledger=ledger,
        join_points=settings.tournament_join_points,
    )
    users = UserService(
        user_repo=user_repo,
        claim_repo=repos["claim_repo"],
        tournament_repo=repos["tournament_repo"],
        activity=activity,
        auth=auth,
    )
    return Services(
        user_repo=user_repo,
        activity=activity,
        ledger=ledger,
        auth=auth,
        rewards=rewards,
        tournaments=tournaments,
        users=users,
    )
