"""
User service - profile and dashboard operations.
Platform-agnostic, works through interfaces.
"""

import asyncio
from typing import Optional
from uuid import UUID
from core.domain.models import (
    PublicUser, UserUpdate, Dashboard, DashboardStats, ActivityType,
)
from core.domain.constants import DASHBOARD_ACTIVITY_LIMIT
from core.domain.errors import NotFoundError, ValidationError
from core.interfaces.repositories import IUserRepository, IClaimRepository, ITournamentRepository
from core.services.activity_service import ActivityService
from core.services.auth_service import AuthService


class UserService:
    """Service for user-related operations"""

    def __init__(
        self,
        user_repo: IUserRepository,
        claim_repo: IClaimRepository,
        tournament_repo: ITournamentRepository,
        activity: ActivityService,
        auth: AuthService,
    ):
        self.user_repo = user_repo
        self.claim_repo = claim_repo
        self.tournament_repo = tournament_repo
        self.activity = activity
        self.auth = auth

    async def get_profile(self, user_id: UUID) -> PublicUser:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("user")
        return user.public()

    async def update_profile(
        self,
        user_id: UUID,
        username: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> PublicUser:
        """Update name/avatar. Empty values are ignored."""
        changes = {}
        if username and username.strip():
            changes["username"] = username.strip()
            self.auth.validate_username(changes["username"])
        if avatar and avatar.strip():
            changes["avatar"] = avatar.strip()
        if not changes:
            raise ValidationError("Nothing to update")

        user = await self.user_repo.update(user_id, UserUpdate(**changes))
        if not user:
            raise NotFoundError("user")

        await self.activity.record(
            user_id=user_id,
            activity_type=ActivityType.PROFILE_UPDATE,
            description="Profile updated",
        )
        return user.public()

    async def get_dashboard(self, user_id: UUID) -> Dashboard:
        """Profile, participations, claims and recent activity in one call"""
        user, tournaments, rewards, activity = await asyncio.gather(
            self.user_repo.get_by_id(user_id),
            self.tournament_repo.list_for_user(user_id),
            self.claim_repo.list_for_user(user_id),
            self.activity.recent(user_id, DASHBOARD_ACTIVITY_LIMIT),
        )
        if not user:
            raise NotFoundError("user")

        return Dashboard(
            user=user.public(),
            tournaments=tournaments,
            rewards=rewards,
            activity=activity,
            stats=DashboardStats(
                total_tournaments=len(tournaments),
                total_rewards=len(rewards),
                total_points=user.points,
            ),
        )
