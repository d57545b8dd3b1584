"""
Tournament service - listing and joining tournaments.
Joining credits participation points through the ledger.
"""

import logging
from typing import List
from uuid import UUID
from core.domain.models import Tournament, Participation, ActivityType
from core.domain.constants import JOINABLE_TOURNAMENT_STATUSES, TOURNAMENT_JOIN_POINTS
from core.domain.errors import ConflictError, NotFoundError, ValidationError
from core.interfaces.repositories import ITournamentRepository, IUserRepository
from core.services.points_ledger import PointsLedger

logger = logging.getLogger(__name__)


class TournamentService:
    """Service for tournament-related operations"""

    def __init__(
        self,
        tournament_repo: ITournamentRepository,
        user_repo: IUserRepository,
        ledger: PointsLedger,
        join_points: int = TOURNAMENT_JOIN_POINTS,
    ):
        self.tournament_repo = tournament_repo
        self.user_repo = user_repo
        self.ledger = ledger
        self.join_points = join_points

    async def list_tournaments(self) -> List[Tournament]:
        return await self.tournament_repo.list_all()

    async def get_user_tournaments(self, user_id: UUID) -> List[Participation]:
        return await self.tournament_repo.list_for_user(user_id)

    async def join_tournament(self, user_id: UUID, tournament_id: UUID) -> Participation:
        """Register user for a tournament and credit join points"""
        if not await self.user_repo.get_by_id(user_id):
            raise NotFoundError("user")

        tournament = await self.tournament_repo.get_by_id(tournament_id)
        if not tournament:
            raise NotFoundError("tournament")

        if tournament.status.value not in JOINABLE_TOURNAMENT_STATUSES:
            raise ValidationError(f"Tournament is {tournament.status.value}")

        # Capacity is advisory: the store only enforces one row per user
        count = await self.tournament_repo.count_participants(tournament.id)
        if count >= tournament.max_participants:
            raise ConflictError("Tournament is full")

        participation = await self.tournament_repo.add_participant(tournament.id, user_id)
        logger.info(f"[TOURNAMENT] user {user_id} joined {tournament.id} ({count + 1}/{tournament.max_participants})")

        if self.join_points:
            await self.ledger.earn(
                user_id=user_id,
                amount=self.join_points,
                description=f"Joined {tournament.title}",
                activity_type=ActivityType.TOURNAMENT_JOIN,
                tournament_id=tournament.id,
            )
        return participation
