from core.services.activity_service import ActivityService
from core.services.points_ledger import PointsLedger
from core.services.auth_service import AuthService
from core.services.reward_service import RewardService
from core.services.tournament_service import TournamentService
from core.services.user_service import UserService

__all__ = [
    "ActivityService",
    "PointsLedger",
    "AuthService",
    "RewardService",
    "TournamentService",
    "UserService",
]
