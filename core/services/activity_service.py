"""
Activity service - best-effort writes to the append-only activity log.

Appends never fail the operation that triggered them. Failures are logged
with traceback and counted so they stay visible to monitoring.
"""

import logging
from typing import Optional, List
from uuid import UUID
from core.domain.models import ActivityCreate, ActivityEntry, ActivityType
from core.domain.constants import DEFAULT_ACTIVITY_LIMIT, MAX_ACTIVITY_LIMIT, MAX_DESCRIPTION_LENGTH
from core.interfaces.repositories import IActivityRepository

logger = logging.getLogger(__name__)


class ActivityService:
    """Service for the user activity log"""

    def __init__(self, activity_repo: IActivityRepository):
        self.activity_repo = activity_repo
        self.failed_appends = 0

    async def record(
        self,
        user_id: UUID,
        activity_type: ActivityType,
        description: str,
        points_change: int = 0,
        tournament_id: Optional[UUID] = None,
        reward_id: Optional[UUID] = None,
    ) -> Optional[ActivityEntry]:
        """Append an entry. Returns None if the append failed. Never raises."""
        try:
            entry = ActivityCreate(
                user_id=user_id,
                activity_type=activity_type,
                description=description[:MAX_DESCRIPTION_LENGTH],
                points_change=points_change,
                tournament_id=tournament_id,
                reward_id=reward_id,
            )
            return await self.activity_repo.append(entry)
        except Exception:
            self.failed_appends += 1
            logger.exception(
                f"[ACTIVITY] append failed: user={user_id} type={activity_type.value} "
                f"points_change={points_change} reward={reward_id} tournament={tournament_id} "
                f"(failed_appends={self.failed_appends})"
            )
            return None

    async def recent(self, user_id: UUID, limit: int = DEFAULT_ACTIVITY_LIMIT) -> List[ActivityEntry]:
        """Latest entries for a user, newest first"""
        limit = max(1, min(limit, MAX_ACTIVITY_LIMIT))
        return await self.activity_repo.list_for_user(user_id, limit)
