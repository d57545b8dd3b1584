"""
Admin handlers - manual points grants.
"""

import logging
from aiohttp import web
from core.domain.errors import ValidationError
from adapters.api.keys import SERVICES
from adapters.api.middleware import require_admin
from adapters.api.handlers.common import read_json, path_uuid

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


@routes.post("/api/admin/users/{user_id}/points")
async def grant_points(request: web.Request) -> web.Response:
    admin = require_admin(request)
    user_id = path_uuid(request, "user_id")
    body = await read_json(request)

    amount = body.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("amount must be a positive integer")
    reason = (body.get("description") or "").strip() or "Points awarded by admin"

    user = await request.app[SERVICES].ledger.earn(user_id, amount, description=reason)
    logger.info(f"[ADMIN] {admin.user_id} granted {amount} points to {user_id}")
    return web.json_response({"user_id": str(user.id), "points": user.points})
