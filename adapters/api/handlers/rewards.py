"""
Reward handlers - catalog, claims and the activity feed.
"""

from aiohttp import web
from core.domain.constants import DEFAULT_ACTIVITY_LIMIT
from core.domain.errors import ValidationError
from adapters.api.keys import SERVICES
from adapters.api.middleware import require_user
from adapters.api.handlers.common import path_uuid, as_json, list_json

routes = web.RouteTableDef()


@routes.get("/api/rewards")
async def list_rewards(request: web.Request) -> web.Response:
    return list_json(await request.app[SERVICES].rewards.list_rewards())


@routes.get("/api/rewards/mine")
async def my_rewards(request: web.Request) -> web.Response:
    claims = require_user(request)
    return list_json(await request.app[SERVICES].rewards.get_user_rewards(claims.user_id))


@routes.post("/api/rewards/{reward_id}/claim")
async def claim_reward(request: web.Request) -> web.Response:
    claims = require_user(request)
    reward_id = path_uuid(request, "reward_id")
    result = await request.app[SERVICES].rewards.claim_reward(claims.user_id, reward_id)
    return as_json(result, status=201)


@routes.get("/api/activity")
async def recent_activity(request: web.Request) -> web.Response:
    claims = require_user(request)
    try:
        limit = int(request.query.get("limit", DEFAULT_ACTIVITY_LIMIT))
    except ValueError as e:
        raise ValidationError("limit must be an integer") from e
    return list_json(await request.app[SERVICES].activity.recent(claims.user_id, limit))
