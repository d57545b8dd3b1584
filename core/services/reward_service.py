"""
Reward service - reward catalog and the claim engine.

A claim reads the user and the reward, validates balance and stock against
that snapshot, then commits in a single conditional write that takes one
unit of stock, debits the points and inserts the claim record together.

If the commit finds the state changed (StaleStateError) nothing was written
and the whole claim is retried from the read, up to `max_attempts`.
A commit that fails with RepositoryUnavailableError may still have landed,
so the claim id is looked up before the error is reported.
The activity entry is written last and is best-effort.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID, uuid4
from core.domain.models import (
    Reward, RewardSummary, Claim, ClaimWithReward, ClaimResult, User, ActivityType,
)
from core.domain.constants import CLAIM_RETRY_ATTEMPTS
from core.domain.errors import (
    ConflictError, InsufficientBalanceError, NotFoundError, OutOfStockError,
    RepositoryUnavailableError, StaleStateError,
)
from core.interfaces.repositories import IUserRepository, IRewardRepository, IClaimRepository
from core.services.activity_service import ActivityService

logger = logging.getLogger(__name__)


class RewardService:
    """Service for reward listing and redemption"""

    def __init__(
        self,
        user_repo: IUserRepository,
        reward_repo: IRewardRepository,
        claim_repo: IClaimRepository,
        activity: ActivityService,
        max_attempts: int = CLAIM_RETRY_ATTEMPTS,
    ):
        self.user_repo = user_repo
        self.reward_repo = reward_repo
        self.claim_repo = claim_repo
        self.activity = activity
        self.max_attempts = max_attempts

    async def list_rewards(self) -> List[Reward]:
        """Active rewards, cheapest first"""
        return await self.reward_repo.list_active()

    async def get_user_rewards(self, user_id: UUID) -> List[ClaimWithReward]:
        """User's claims joined with reward, newest first"""
        return await self.claim_repo.list_for_user(user_id)

    async def claim_reward(self, user_id: UUID, reward_id: UUID) -> ClaimResult:
        """Redeem a reward for points on behalf of `user_id`"""
        # One id for every attempt: a stale attempt wrote nothing
        claim_id = uuid4()
        for attempt in range(1, self.max_attempts + 1):
            try:
                claim, reward, user = await self._attempt_claim(claim_id, user_id, reward_id)
            except StaleStateError:
                logger.info(
                    f"[CLAIM] stale state for user={user_id} reward={reward_id}, "
                    f"attempt {attempt}/{self.max_attempts}"
                )
                continue

            logger.info(
                f"[CLAIM] user={user_id} claimed reward={reward_id} "
                f"for {reward.points_required} points, stock left {reward.stock}"
            )
            await self.activity.record(
                user_id=user_id,
                activity_type=ActivityType.REWARD_CLAIM,
                description=f"Claimed {reward.title}",
                points_change=-reward.points_required,
                reward_id=reward.id,
            )
            return ClaimResult(
                claim=claim,
                reward=RewardSummary(
                    id=reward.id,
                    title=reward.title,
                    category=reward.category,
                    points_required=reward.points_required,
                    stock=reward.stock,
                ),
                points_balance=user.points,
            )

        logger.warning(f"[CLAIM] retry budget exhausted for user={user_id} reward={reward_id}")
        raise ConflictError("Reward is in high demand, please retry")

    async def _attempt_claim(self, claim_id: UUID, user_id: UUID, reward_id: UUID) -> Tuple[Claim, Reward, User]:
        """One read-validate-commit pass. Returns (claim, reward after, user after)."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("user")

        reward = await self.reward_repo.get_by_id(reward_id)
        if not reward or not reward.is_active:
            raise NotFoundError("reward")

        cost = reward.points_required
        if user.points < cost:
            raise InsufficientBalanceError(required=cost, available=user.points)

        if reward.stock <= 0:
            raise OutOfStockError()

        try:
            claim = await self.claim_repo.commit_claim(
                claim_id=claim_id,
                user_id=user.id,
                reward_id=reward.id,
                cost=cost,
                expected_stock=reward.stock,
                expected_points=user.points,
            )
        except RepositoryUnavailableError:
            claim = await self._find_landed_claim(claim_id)
            if claim is None:
                raise

        # The commit was conditional on exactly this snapshot
        return (
            claim,
            reward.model_copy(update={"stock": reward.stock - 1}),
            user.model_copy(update={"points": user.points - cost}),
        )

    async def _find_landed_claim(self, claim_id: UUID) -> Optional[Claim]:
        """Look up a claim whose commit reported no result"""
        try:
            claim = await self.claim_repo.get_by_id(claim_id)
        except RepositoryUnavailableError:
            logger.error(f"[CLAIM] commit of claim {claim_id} has unknown outcome, re-read failed")
            return None
        if claim:
            logger.warning(f"[CLAIM] commit of claim {claim_id} reported failure but landed")
        else:
            logger.error(f"[CLAIM] commit of claim {claim_id} has unknown outcome, not found on re-read")
        return claim
