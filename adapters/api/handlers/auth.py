"""
Auth handlers - register, login, profile and dashboard.
"""

from aiohttp import web
from adapters.api.keys import SERVICES
from adapters.api.middleware import require_user
from adapters.api.handlers.common import read_json, as_json

routes = web.RouteTableDef()


@routes.post("/api/auth/register")
async def register(request: web.Request) -> web.Response:
    body = await read_json(request)
    result = await request.app[SERVICES].auth.register(
        username=body.get("username"),
        email=body.get("email"),
        password=body.get("password"),
    )
    return web.json_response({
        "message": "User registered successfully",
        **result.model_dump(mode="json"),
    }, status=201)


@routes.post("/api/auth/login")
async def login(request: web.Request) -> web.Response:
    body = await read_json(request)
    result = await request.app[SERVICES].auth.login(
        email=body.get("email"),
        password=body.get("password"),
    )
    return web.json_response({
        "message": "Login successful",
        **result.model_dump(mode="json"),
    })


@routes.get("/api/auth/profile")
async def get_profile(request: web.Request) -> web.Response:
    claims = require_user(request)
    return as_json(await request.app[SERVICES].users.get_profile(claims.user_id))


@routes.put("/api/auth/profile")
async def update_profile(request: web.Request) -> web.Response:
    claims = require_user(request)
    body = await read_json(request)
    user = await request.app[SERVICES].users.update_profile(
        claims.user_id,
        username=body.get("username") or body.get("name"),
        avatar=body.get("avatar"),
    )
    return as_json(user)


@routes.get("/api/auth/dashboard")
async def dashboard(request: web.Request) -> web.Response:
    claims = require_user(request)
    return as_json(await request.app[SERVICES].users.get_dashboard(claims.user_id))
