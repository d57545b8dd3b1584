"""Tests for profile, dashboard and the activity feed."""

from uuid import uuid4

import pytest

from core.domain.models import ActivityType
from core.domain.errors import NotFoundError, ValidationError


@pytest.mark.asyncio
class TestProfile:

    async def test_get_profile_hides_password(self, services, make_user):
        user = make_user(points=42)
        profile = await services.users.get_profile(user.id)
        assert profile.points == 42
        assert not hasattr(profile, "password")

    async def test_get_profile_unknown_user(self, services):
        with pytest.raises(NotFoundError):
            await services.users.get_profile(uuid4())

    async def test_update_profile(self, services, store, make_user):
        user = make_user(points=42)

        profile = await services.users.update_profile(user.id, username="  NewName ", avatar="https://cdn/x.png")

        assert profile.username == "NewName"
        assert profile.avatar == "https://cdn/x.png"
        assert profile.points == 42
        assert store.activity[-1].activity_type == ActivityType.PROFILE_UPDATE

    async def test_update_profile_requires_changes(self, services, make_user):
        with pytest.raises(ValidationError):
            await services.users.update_profile(make_user().id, username="  ", avatar=None)


@pytest.mark.asyncio
class TestDashboard:

    async def test_dashboard(self, services, make_user, make_reward, make_tournament):
        user = make_user(points=1000)
        reward = make_reward(points_required=200, stock=5)
        tournament = make_tournament()
        await services.tournaments.join_tournament(user.id, tournament.id)
        await services.rewards.claim_reward(user.id, reward.id)

        dashboard = await services.users.get_dashboard(user.id)

        assert dashboard.stats.total_tournaments == 1
        assert dashboard.stats.total_rewards == 1
        assert dashboard.stats.total_points == 810
        assert [e.activity_type for e in dashboard.activity] == [
            ActivityType.REWARD_CLAIM,
            ActivityType.TOURNAMENT_JOIN,
        ]

    async def test_dashboard_activity_is_capped(self, services, make_user):
        user = make_user()
        for i in range(8):
            await services.ledger.earn(user.id, 1, description=f"bonus {i}")

        dashboard = await services.users.get_dashboard(user.id)

        assert len(dashboard.activity) == 5
        assert dashboard.activity[0].description == "bonus 7"


@pytest.mark.asyncio
class TestActivityFeed:

    async def test_recent_newest_first_with_limit(self, services, make_user):
        user = make_user()
        for i in range(4):
            await services.activity.record(user.id, ActivityType.POINTS_EARNED, f"entry {i}", points_change=1)

        recent = await services.activity.recent(user.id, limit=2)

        assert [e.description for e in recent] == ["entry 3", "entry 2"]

    async def test_limit_is_clamped(self, services, make_user):
        user = make_user()
        await services.activity.record(user.id, ActivityType.LOGIN, "login")
        assert len(await services.activity.recent(user.id, limit=0)) == 1
        assert len(await services.activity.recent(user.id, limit=10_000)) == 1

    async def test_only_own_entries(self, services, make_user):
        alice, bob = make_user(), make_user()
        await services.activity.record(alice.id, ActivityType.LOGIN, "login")
        assert await services.activity.recent(bob.id) == []
