"""Tests for PointsLedger earn / spend."""

import asyncio
from uuid import uuid4

import pytest

from core.domain.models import ActivityType
from core.domain.errors import ConflictError, NotFoundError, StaleStateError, ValidationError
from core.services import ActivityService, PointsLedger
from infrastructure.memory import MemoryUserRepository


class AlwaysStaleUserRepository(MemoryUserRepository):
    async def update_points(self, user_id, expected_points, new_points):
        raise StaleStateError()


@pytest.mark.asyncio
class TestPointsLedger:

    async def test_earn_credits_and_records(self, services, store, make_user):
        user = make_user(points=50)

        updated = await services.ledger.earn(user.id, 25, description="Bonus")

        assert updated.points == 75
        assert store.users[user.id].points == 75
        entry = store.activity[-1]
        assert entry.activity_type == ActivityType.POINTS_EARNED
        assert entry.points_change == 25
        assert entry.description == "Bonus"

    async def test_spend(self, services, store, make_user):
        user = make_user(points=50)
        updated = await services.ledger.spend(user, 50)
        assert updated.points == 0
        assert store.activity == []

    async def test_spend_rejects_overdraft(self, services, store, make_user):
        user = make_user(points=10)
        with pytest.raises(ValidationError):
            await services.ledger.spend(user, 11)
        assert store.users[user.id].points == 10

    async def test_spend_with_stale_snapshot(self, services, store, make_user):
        user = make_user(points=100)
        await services.ledger.earn(user.id, 5, description="Bonus")
        with pytest.raises(StaleStateError):
            await services.ledger.spend(user, 10)
        assert store.users[user.id].points == 105

    async def test_earn_with_tournament_reference(self, services, store, make_user, make_tournament):
        user = make_user(points=0)
        tournament = make_tournament()

        await services.ledger.earn(user.id, 10, description="Joined",
                                   activity_type=ActivityType.TOURNAMENT_JOIN,
                                   tournament_id=tournament.id)

        entry = store.activity[-1]
        assert entry.activity_type == ActivityType.TOURNAMENT_JOIN
        assert entry.tournament_id == tournament.id

    @pytest.mark.parametrize("amount", [0, -5, True, 1.5])
    async def test_amount_must_be_positive_int(self, services, make_user, amount):
        user = make_user(points=100)
        with pytest.raises(ValidationError):
            await services.ledger.earn(user.id, amount, description="Bonus")

    async def test_earn_unknown_user(self, services):
        with pytest.raises(NotFoundError):
            await services.ledger.earn(uuid4(), 10, description="Bonus")

    async def test_concurrent_earns_are_not_lost(self, services, store, make_user):
        user = make_user(points=0)
        await asyncio.gather(
            services.ledger.earn(user.id, 10, description="a"),
            services.ledger.earn(user.id, 20, description="b"),
        )
        assert store.users[user.id].points == 30

    async def test_credit_gives_up_after_retry_budget(self, store, repos, make_user):
        user_repo = AlwaysStaleUserRepository(store)
        ledger = PointsLedger(user_repo, ActivityService(repos["activity_repo"]), max_attempts=2)
        user = make_user(points=0)
        with pytest.raises(ConflictError):
            await ledger.earn(user.id, 10, description="Bonus")
        assert store.users[user.id].points == 0
