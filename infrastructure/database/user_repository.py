"""
Supabase implementation of User repository.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID
from supabase import Client
from core.domain.models import User, UserCreate, UserUpdate
from core.domain.errors import NotFoundError, StaleStateError, ValidationError
from core.interfaces.repositories import IUserRepository
from infrastructure.database.supabase_client import run_sync, first_row


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseUserRepository(IUserRepository):
    """Supabase implementation of user repository"""

    def __init__(self, client: Client):
        self.client = client

    def _to_model(self, data: dict) -> User:
        """Convert database row to User model"""
        return User(
            id=data["id"],
            username=data.get("username") or data.get("name") or "",
            email=data["email"],
            password=data.get("password", ""),
            role=data.get("role") or "user",
            avatar=data.get("avatar"),
            points=data.get("points") or 0,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _get_by_id_sync(self, user_id: UUID) -> Optional[dict]:
        response = self.client.table("users").select("*").eq("id", str(user_id)).execute()
        return first_row(response)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        data = await self._get_by_id_sync(user_id)
        return self._to_model(data) if data else None

    @run_sync
    def _get_by_email_sync(self, email: str) -> Optional[dict]:
        response = self.client.table("users").select("*").eq("email", email).execute()
        return first_row(response)

    async def get_by_email(self, email: str) -> Optional[User]:
        data = await self._get_by_email_sync(email)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, user_data: UserCreate) -> dict:
        data = {
            "username": user_data.username,
            "email": user_data.email,
            "password": user_data.password,
            "role": user_data.role.value,
            "points": user_data.points,
        }
        response = self.client.table("users").insert(data).execute()
        return response.data[0]

    async def create(self, user_data: UserCreate) -> User:
        data = await self._create_sync(user_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, user_id: UUID, user_data: UserUpdate) -> Optional[dict]:
        update_dict = user_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_dict:
            return None
        update_dict["updated_at"] = _now_iso()
        response = self.client.table("users").update(update_dict).eq("id", str(user_id)).execute()
        return first_row(response)

    async def update(self, user_id: UUID, user_data: UserUpdate) -> Optional[User]:
        data = await self._update_sync(user_id, user_data)
        return self._to_model(data) if data else None

    @run_sync
    def _update_points_sync(self, user_id: UUID, expected_points: int, new_points: int) -> Optional[dict]:
        # Conditional update: matches zero rows if someone else moved the balance
        response = self.client.table("users")\
            .update({"points": new_points, "updated_at": _now_iso()})\
            .eq("id", str(user_id))\
            .eq("points", expected_points)\
            .execute()
        return first_row(response)

    async def update_points(self, user_id: UUID, expected_points: int, new_points: int) -> User:
        if new_points < 0:
            raise ValidationError("Balance cannot go negative")
        data = await self._update_points_sync(user_id, expected_points, new_points)
        if data:
            return self._to_model(data)
        if not await self._get_by_id_sync(user_id):
            raise NotFoundError("user")
        raise StaleStateError(f"Points for user {user_id} changed concurrently")

    @run_sync
    def _ping_sync(self) -> bool:
        self.client.table("users").select("id").limit(1).execute()
        return True

    async def ping(self) -> bool:
        return await self._ping_sync()
