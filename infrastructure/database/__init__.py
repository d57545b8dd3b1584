from infrastructure.database.supabase_client import create_supabase_client
from infrastructure.database.user_repository import SupabaseUserRepository
from infrastructure.database.reward_repository import SupabaseRewardRepository, SupabaseClaimRepository
from infrastructure.database.activity_repository import SupabaseActivityRepository
from infrastructure.database.tournament_repository import SupabaseTournamentRepository

__all__ = [
    "create_supabase_client",
    "SupabaseUserRepository",
    "SupabaseRewardRepository",
    "SupabaseClaimRepository",
    "SupabaseActivityRepository",
    "SupabaseTournamentRepository",
]
