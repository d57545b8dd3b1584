"""
Supabase implementation of Reward and Claim repositories.
"""

from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from supabase import Client
from core.domain.models import Reward, Claim, ClaimWithReward, ClaimStatus
from core.domain.errors import StaleStateError
from core.interfaces.repositories import IRewardRepository, IClaimRepository
from infrastructure.database.supabase_client import run_sync, first_row


def _reward_to_model(data: dict) -> Reward:
    return Reward(
        id=data["id"],
        title=data["title"],
        description=data.get("description"),
        points_required=data["points_required"],
        category=data.get("category") or "general",
        image_url=data.get("image_url"),
        stock=data.get("stock") or 0,
        is_active=data.get("is_active", True),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


class SupabaseRewardRepository(IRewardRepository):
    """Supabase implementation of reward repository"""

    def __init__(self, client: Client):
        self.client = client

    @run_sync
    def _get_by_id_sync(self, reward_id: UUID) -> Optional[dict]:
        response = self.client.table("rewards").select("*").eq("id", str(reward_id)).execute()
        return first_row(response)

    async def get_by_id(self, reward_id: UUID) -> Optional[Reward]:
        data = await self._get_by_id_sync(reward_id)
        return _reward_to_model(data) if data else None

    @run_sync
    def _list_active_sync(self) -> List[dict]:
        response = self.client.table("rewards").select("*")\
            .eq("is_active", True)\
            .order("points_required", desc=False)\
            .execute()
        return response.data or []

    async def list_active(self) -> List[Reward]:
        data = await self._list_active_sync()
        return [_reward_to_model(d) for d in data]

    @run_sync
    def _decrement_stock_sync(self, reward_id: UUID, expected_stock: int) -> Optional[dict]:
        # Conditional update: matches zero rows if the stock moved since it was read
        response = self.client.table("rewards")\
            .update({"stock": expected_stock - 1, "updated_at": datetime.now(timezone.utc).isoformat()})\
            .eq("id", str(reward_id))\
            .eq("stock", expected_stock)\
            .eq("is_active", True)\
            .execute()
        return first_row(response)

    async def decrement_stock(self, reward_id: UUID, expected_stock: int) -> Reward:
        if expected_stock <= 0:
            raise StaleStateError("Nothing left to take")
        data = await self._decrement_stock_sync(reward_id, expected_stock)
        if not data:
            raise StaleStateError(f"Stock for reward {reward_id} changed concurrently")
        return _reward_to_model(data)


class SupabaseClaimRepository(IClaimRepository):
    """Claims live in `user_rewards`"""

    def __init__(self, client: Client):
        self.client = client

    def _to_model(self, data: dict) -> ClaimWithReward:
        reward = data.get("reward")
        return ClaimWithReward(
            id=data["id"],
            user_id=data["user_id"],
            reward_id=data["reward_id"],
            status=ClaimStatus(data.get("status") or "claimed"),
            redeemed_at=data.get("redeemed_at"),
            reward=_reward_to_model(reward) if reward else None,
        )

    def _to_claim(self, data: dict) -> Claim:
        return Claim(**self._to_model(data).model_dump(exclude={"reward"}))

    @run_sync
    def _commit_claim_sync(self, claim_id: UUID, user_id: UUID, reward_id: UUID,
                           cost: int, expected_stock: int, expected_points: int) -> Optional[dict]:
        # One transaction in claim_reward(): stock, points and the claim row
        # are written together or not at all (40001 when a row moved)
        response = self.client.rpc("claim_reward", {
            "p_claim_id": str(claim_id),
            "p_user_id": str(user_id),
            "p_reward_id": str(reward_id),
            "p_cost": cost,
            "p_expected_stock": expected_stock,
            "p_expected_points": expected_points,
        }).execute()
        return first_row(response)

    async def commit_claim(
        self,
        claim_id: UUID,
        user_id: UUID,
        reward_id: UUID,
        cost: int,
        expected_stock: int,
        expected_points: int,
    ) -> Claim:
        data = await self._commit_claim_sync(
            claim_id, user_id, reward_id, cost, expected_stock, expected_points
        )
        if not data:
            # The function returns the inserted row; fall back to what was asked for
            return Claim(id=claim_id, user_id=user_id, reward_id=reward_id)
        return self._to_claim(data)

    @run_sync
    def _get_by_id_sync(self, claim_id: UUID) -> Optional[dict]:
        response = self.client.table("user_rewards").select("*").eq("id", str(claim_id)).execute()
        return first_row(response)

    async def get_by_id(self, claim_id: UUID) -> Optional[Claim]:
        data = await self._get_by_id_sync(claim_id)
        return self._to_claim(data) if data else None

    @run_sync
    def _list_for_user_sync(self, user_id: UUID) -> List[dict]:
        response = self.client.table("user_rewards")\
            .select("*, reward:rewards(*)")\
            .eq("user_id", str(user_id))\
            .order("redeemed_at", desc=True)\
            .execute()
        return response.data or []

    async def list_for_user(self, user_id: UUID) -> List[ClaimWithReward]:
        data = await self._list_for_user_sync(user_id)
        return [self._to_model(d) for d in data]

    @run_sync
    def _count_for_user_sync(self, user_id: UUID) -> int:
        response = self.client.table("user_rewards")\
            .select("id", count="exact")\
            .eq("user_id", str(user_id))\
            .execute()
        return response.count or 0

    async def count_for_user(self, user_id: UUID) -> int:
        return await self._count_for_user_sync(user_id)
