"""HTTP API tests against the memory backend."""

from uuid import uuid4

import pytest
import pytest_asyncio
from aiohttp import test_utils

from core.domain.models import UserRole
from adapters.api.app import create_app
from adapters.api.middleware import ThrottlingMiddleware


@pytest_asyncio.fixture
async def client(services):
    app = create_app(services, rate_limit=False)
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        yield client


async def register(client, username="Nasser", email="nasser@example.com", password="secret123"):
    resp = await client.post("/api/auth/register", json={
        "username": username, "email": email, "password": password,
    })
    assert resp.status == 201
    return await resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.mark.asyncio
class TestSystemRoutes:

    async def test_index(self, client):
        resp = await client.get("/")
        assert resp.status == 200
        assert (await resp.json())["status"] == "healthy"

    async def test_health_reports_database(self, client):
        resp = await client.get("/health")
        body = await resp.json()
        assert resp.status == 200
        assert body["database"] == "connected"

    async def test_unknown_route(self, client):
        resp = await client.get("/api/nope")
        assert resp.status == 404
        assert (await resp.json())["error"] == "not_found"


@pytest.mark.asyncio
class TestAuthRoutes:

    async def test_register_and_profile(self, client):
        body = await register(client)
        assert body["user"]["points"] == 100
        assert "password" not in body["user"]

        resp = await client.get("/api/auth/profile", headers=bearer(body["token"]))
        assert resp.status == 200
        assert (await resp.json())["email"] == "nasser@example.com"

    async def test_login(self, client):
        await register(client)
        resp = await client.post("/api/auth/login", json={"email": "nasser@example.com", "password": "secret123"})
        assert resp.status == 200
        assert (await resp.json())["token"]

    async def test_login_failure(self, client):
        await register(client)
        resp = await client.post("/api/auth/login", json={"email": "nasser@example.com", "password": "nope123"})
        assert resp.status == 401
        assert (await resp.json())["error"] == "authentication_failed"

    async def test_duplicate_registration(self, client):
        await register(client)
        resp = await client.post("/api/auth/register", json={
            "username": "Other", "email": "nasser@example.com", "password": "secret123",
        })
        assert resp.status == 409

    async def test_over_long_password_is_rejected(self, client, store):
        resp = await client.post("/api/auth/register", json={
            "username": "Nasser", "email": "nasser@example.com", "password": "x" * 80,
        })
        assert resp.status == 400
        assert (await resp.json())["error"] == "validation_error"
        assert store.users == {}

    async def test_invalid_json(self, client):
        resp = await client.post("/api/auth/register", data="{not json",
                                 headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert (await resp.json())["error"] == "validation_error"

    async def test_profile_requires_token(self, client):
        resp = await client.get("/api/auth/profile")
        assert resp.status == 401
        assert (await resp.json())["error"] == "invalid_token"

    async def test_update_profile(self, client):
        body = await register(client)
        resp = await client.put("/api/auth/profile", json={"username": "Renamed"}, headers=bearer(body["token"]))
        assert resp.status == 200
        assert (await resp.json())["username"] == "Renamed"

    async def test_dashboard(self, client):
        body = await register(client)
        resp = await client.get("/api/auth/dashboard", headers=bearer(body["token"]))
        data = await resp.json()
        assert resp.status == 200
        assert data["stats"]["total_points"] == 100
        assert data["activity"][0]["activity_type"] == "registration"


@pytest.mark.asyncio
class TestRewardRoutes:

    async def test_list_rewards(self, client, make_reward):
        make_reward(points_required=800, title="Keyboard")
        make_reward(points_required=200, title="Game Key")
        resp = await client.get("/api/rewards")
        assert [r["title"] for r in await resp.json()] == ["Game Key", "Keyboard"]

    async def test_claim(self, client, make_reward):
        body = await register(client)
        reward = make_reward(points_required=100, stock=1)

        resp = await client.post(f"/api/rewards/{reward.id}/claim", headers=bearer(body["token"]))
        data = await resp.json()
        assert resp.status == 201
        assert data["points_balance"] == 0
        assert data["reward"]["stock"] == 0

        resp = await client.get("/api/rewards/mine", headers=bearer(body["token"]))
        assert len(await resp.json()) == 1

    async def test_claim_insufficient_points(self, client, make_reward):
        body = await register(client)
        reward = make_reward(points_required=500, stock=1)
        resp = await client.post(f"/api/rewards/{reward.id}/claim", headers=bearer(body["token"]))
        assert resp.status == 400
        assert (await resp.json())["error"] == "insufficient_points"

    async def test_claim_out_of_stock(self, client, make_reward):
        body = await register(client)
        reward = make_reward(points_required=50, stock=0)
        resp = await client.post(f"/api/rewards/{reward.id}/claim", headers=bearer(body["token"]))
        assert resp.status == 409
        assert (await resp.json())["error"] == "out_of_stock"

    async def test_claim_unknown_reward(self, client):
        body = await register(client)
        resp = await client.post(f"/api/rewards/{uuid4()}/claim", headers=bearer(body["token"]))
        assert resp.status == 404
        assert (await resp.json())["error"] == "reward_not_found"

    async def test_claim_bad_id(self, client):
        body = await register(client)
        resp = await client.post("/api/rewards/not-a-uuid/claim", headers=bearer(body["token"]))
        assert resp.status == 400

    async def test_activity_feed(self, client):
        body = await register(client)
        resp = await client.get("/api/activity?limit=1", headers=bearer(body["token"]))
        data = await resp.json()
        assert resp.status == 200
        assert len(data) == 1
        assert data[0]["points_change"] == 100


@pytest.mark.asyncio
class TestTournamentRoutes:

    async def test_join(self, client, make_tournament):
        body = await register(client)
        tournament = make_tournament()

        resp = await client.post(f"/api/tournaments/{tournament.id}/join", headers=bearer(body["token"]))
        assert resp.status == 201

        resp = await client.post(f"/api/tournaments/{tournament.id}/join", headers=bearer(body["token"]))
        assert resp.status == 409

        resp = await client.get("/api/tournaments/mine", headers=bearer(body["token"]))
        assert len(await resp.json()) == 1

        resp = await client.get("/api/auth/profile", headers=bearer(body["token"]))
        assert (await resp.json())["points"] == 110


@pytest.mark.asyncio
class TestAdminRoutes:

    async def test_grant_requires_admin(self, client, make_user):
        body = await register(client)
        target = make_user()
        resp = await client.post(f"/api/admin/users/{target.id}/points", json={"amount": 50},
                                 headers=bearer(body["token"]))
        assert resp.status == 403

    async def test_admin_grants_points(self, client, services, store, make_user):
        admin = make_user(role=UserRole.ADMIN)
        token = services.auth.tokens.issue(admin)
        target = make_user(points=5)

        resp = await client.post(f"/api/admin/users/{target.id}/points",
                                 json={"amount": 50, "description": "Tournament winner"},
                                 headers=bearer(token))

        assert resp.status == 200
        assert (await resp.json())["points"] == 55
        assert store.activity[-1].description == "Tournament winner"

    async def test_grant_rejects_bad_amount(self, client, services, make_user):
        admin = make_user(role=UserRole.ADMIN)
        token = services.auth.tokens.issue(admin)
        resp = await client.post(f"/api/admin/users/{make_user().id}/points", json={"amount": -5},
                                 headers=bearer(token))
        assert resp.status == 400


@pytest.mark.asyncio
class TestRateLimiting:

    async def test_login_is_throttled(self, services):
        app = create_app(services)
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            statuses = []
            for _ in range(12):
                resp = await client.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
                statuses.append(resp.status)

        assert statuses[:10] == [401] * 10
        assert statuses[10:] == [429, 429]

    async def test_window_reopens_after_interval(self, services):
        clock = FakeClock()
        app = create_app(services, throttle=ThrottlingMiddleware(clock=clock))
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            for _ in range(10):
                await client.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
            resp = await client.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
            assert resp.status == 429

            clock.now += 61
            resp = await client.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
            assert resp.status == 401

    async def test_idle_clients_are_forgotten(self, services):
        clock = FakeClock()
        throttle = ThrottlingMiddleware(clock=clock)
        app = create_app(services, throttle=throttle)
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            await client.get("/api/rewards")
            await client.get("/health")
            assert len(throttle._requests) == 2

            clock.now += 61
            await client.get("/health")

        assert [key.split(":")[-1] for key in throttle._requests] == ["/health"]
        assert len(throttle._requests[next(iter(throttle._requests))]) == 1


class TestThrottleCleanup:

    def test_expired_key_is_removed(self):
        clock = FakeClock()
        throttle = ThrottlingMiddleware(clock=clock)
        throttle._requests["10.0.0.1:/health"] = [clock.now]

        throttle._cleanup("10.0.0.1:/health", clock.now + 61)

        assert throttle._requests == {}

    def test_recent_timestamps_are_kept(self):
        clock = FakeClock()
        throttle = ThrottlingMiddleware(clock=clock)
        throttle._requests["10.0.0.1:/health"] = [clock.now - 120, clock.now]

        throttle._cleanup("10.0.0.1:/health", clock.now + 1)

        assert throttle._requests == {"10.0.0.1:/health": [clock.now]}
