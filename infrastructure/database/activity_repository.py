"""
Activity Repository - append-only writes to `user_activity`.
"""

from typing import List
from uuid import UUID
from supabase import Client
from core.domain.models import ActivityCreate, ActivityEntry, ActivityType
from core.interfaces.repositories import IActivityRepository
from infrastructure.database.supabase_client import run_sync


class SupabaseActivityRepository(IActivityRepository):
    """Supabase implementation of the activity log"""

    def __init__(self, client: Client):
        self.client = client

    def _to_model(self, data: dict) -> ActivityEntry:
        return ActivityEntry(
            id=data["id"],
            user_id=data["user_id"],
            activity_type=ActivityType(data["activity_type"]),
            description=data.get("description") or "",
            points_change=data.get("points_change") or 0,
            tournament_id=data.get("tournament_id"),
            reward_id=data.get("reward_id"),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _append_sync(self, data: dict) -> dict:
        response = self.client.table("user_activity").insert(data).execute()
        return response.data[0]

    async def append(self, entry: ActivityCreate) -> ActivityEntry:
        data = entry.model_dump(mode="json")
        return self._to_model(await self._append_sync(data))

    @run_sync
    def _list_for_user_sync(self, user_id: UUID, limit: int) -> List[dict]:
        response = self.client.table("user_activity")\
            .select("*")\
            .eq("user_id", str(user_id))\
            .order("created_at", desc=True)\
            .limit(limit)\
            .execute()
        return response.data or []

    async def list_for_user(self, user_id: UUID, limit: int = 10) -> List[ActivityEntry]:
        data = await self._list_for_user_sync(user_id, limit)
        return [self._to_model(d) for d in data]
