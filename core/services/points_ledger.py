"""
Points ledger - earn and spend against a user's points balance.

Every write is conditional on the balance that was just read, so concurrent
writers on other instances are detected instead of overwritten.
A reward claim debits inside its own atomic commit (see RewardService)
rather than through `spend`.
"""

import logging
from typing import Optional
from uuid import UUID
from core.domain.models import User, ActivityType
from core.domain.constants import LEDGER_RETRY_ATTEMPTS
from core.domain.errors import (
    ConflictError, NotFoundError, StaleStateError, ValidationError,
)
from core.interfaces.repositories import IUserRepository
from core.services.activity_service import ActivityService

logger = logging.getLogger(__name__)


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("Points amount must be a positive integer")


class PointsLedger:
    """Balance bookkeeping on top of the user repository"""

    def __init__(
        self,
        user_repo: IUserRepository,
        activity: ActivityService,
        max_attempts: int = LEDGER_RETRY_ATTEMPTS,
    ):
        self.user_repo = user_repo
        self.activity = activity
        self.max_attempts = max_attempts

    async def earn(
        self,
        user_id: UUID,
        amount: int,
        description: str,
        activity_type: ActivityType = ActivityType.POINTS_EARNED,
        tournament_id: Optional[UUID] = None,
        reward_id: Optional[UUID] = None,
    ) -> User:
        """Credit points and record one activity entry with the positive delta"""
        user = await self._credit(user_id, amount)
        await self.activity.record(
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            points_change=amount,
            tournament_id=tournament_id,
            reward_id=reward_id,
        )
        return user

    async def spend(self, user: User, amount: int) -> User:
        """Single conditional debit against the balance in `user`.

        StaleStateError if the balance moved since `user` was read; the caller
        decides whether to re-read. Writes no activity entry.
        """
        _check_amount(amount)
        if user.points < amount:
            raise ValidationError("Balance cannot go negative")
        return await self.user_repo.update_points(user.id, user.points, user.points - amount)

    async def _credit(self, user_id: UUID, amount: int) -> User:
        _check_amount(amount)
        for attempt in range(1, self.max_attempts + 1):
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                raise NotFoundError("user")
            try:
                return await self.user_repo.update_points(user.id, user.points, user.points + amount)
            except StaleStateError:
                logger.info(f"[LEDGER] stale balance for user {user_id}, credit attempt {attempt}/{self.max_attempts}")
        raise ConflictError("Balance is changing too quickly, please retry")
