"""
Supabase implementation of Tournament repository.
"""

import logging
from typing import Optional, List
from uuid import UUID
from supabase import Client
from core.domain.models import Tournament, Participation, ParticipationStatus
from core.domain.errors import ConflictError
from core.interfaces.repositories import ITournamentRepository
from infrastructure.database.supabase_client import run_sync, first_row

logger = logging.getLogger(__name__)


def _tournament_to_model(data: dict) -> Tournament:
    return Tournament(
        id=data["id"],
        title=data["title"],
        game_name=data["game_name"],
        description=data.get("description"),
        start_date=data["start_date"],
        end_date=data["end_date"],
        prize_pool=data.get("prize_pool"),
        max_participants=data.get("max_participants") or 100,
        status=data.get("status") or "upcoming",
        created_by=data.get("created_by"),
        created_at=data.get("created_at"),
    )


class SupabaseTournamentRepository(ITournamentRepository):
    """Supabase implementation of tournament repository"""

    def __init__(self, client: Client):
        self.client = client

    def _to_participation(self, data: dict) -> Participation:
        tournament = data.get("tournament")
        return Participation(
            id=data["id"],
            user_id=data["user_id"],
            tournament_id=data["tournament_id"],
            status=ParticipationStatus(data.get("status") or "registered"),
            joined_at=data.get("joined_at"),
            tournament=_tournament_to_model(tournament) if tournament else None,
        )

    @run_sync
    def _list_all_sync(self) -> List[dict]:
        response = self.client.table("tournaments").select("*")\
            .order("start_date", desc=False)\
            .execute()
        return response.data or []

    async def list_all(self) -> List[Tournament]:
        data = await self._list_all_sync()
        return [_tournament_to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, tournament_id: UUID) -> Optional[dict]:
        response = self.client.table("tournaments").select("*").eq("id", str(tournament_id)).execute()
        return first_row(response)

    async def get_by_id(self, tournament_id: UUID) -> Optional[Tournament]:
        data = await self._get_by_id_sync(tournament_id)
        return _tournament_to_model(data) if data else None

    @run_sync
    def _count_participants_sync(self, tournament_id: UUID) -> int:
        response = self.client.table("user_participation")\
            .select("id", count="exact")\
            .eq("tournament_id", str(tournament_id))\
            .execute()
        return response.count or 0

    async def count_participants(self, tournament_id: UUID) -> int:
        return await self._count_participants_sync(tournament_id)

    @run_sync
    def _add_participant_sync(self, tournament_id: UUID, user_id: UUID) -> dict:
        data = {
            "tournament_id": str(tournament_id),
            "user_id": str(user_id),
            "status": ParticipationStatus.REGISTERED.value,
        }
        # Plain insert: the UNIQUE(user_id, tournament_id) constraint reports duplicates
        response = self.client.table("user_participation").insert(data).execute()
        return response.data[0]

    async def add_participant(self, tournament_id: UUID, user_id: UUID) -> Participation:
        try:
            data = await self._add_participant_sync(tournament_id, user_id)
        except ConflictError as e:
            raise ConflictError("Already joined this tournament") from e
        return self._to_participation(data)

    @run_sync
    def _list_for_user_sync(self, user_id: UUID) -> List[dict]:
        response = self.client.table("user_participation")\
            .select("*, tournament:tournaments(*)")\
            .eq("user_id", str(user_id))\
            .order("joined_at", desc=True)\
            .execute()
        return response.data or []

    async def list_for_user(self, user_id: UUID) -> List[Participation]:
        data = await self._list_for_user_sync(user_id)
        return [self._to_participation(d) for d in data]
