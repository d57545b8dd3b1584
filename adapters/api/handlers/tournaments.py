"""
Tournament handlers.
"""

from aiohttp import web
from adapters.api.keys import SERVICES
from adapters.api.middleware import require_user
from adapters.api.handlers.common import path_uuid, as_json, list_json

routes = web.RouteTableDef()


@routes.get("/api/tournaments")
async def list_tournaments(request: web.Request) -> web.Response:
    return list_json(await request.app[SERVICES].tournaments.list_tournaments())


@routes.get("/api/tournaments/mine")
async def my_tournaments(request: web.Request) -> web.Response:
    claims = require_user(request)
    return list_json(await request.app[SERVICES].tournaments.get_user_tournaments(claims.user_id))


@routes.post("/api/tournaments/{tournament_id}/join")
async def join_tournament(request: web.Request) -> web.Response:
    claims = require_user(request)
    tournament_id = path_uuid(request, "tournament_id")
    participation = await request.app[SERVICES].tournaments.join_tournament(claims.user_id, tournament_id)
    return as_json(participation, status=201)
