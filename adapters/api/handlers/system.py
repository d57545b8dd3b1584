"""
Service info and health check.
"""

import logging
import time
from datetime import datetime, timezone
from aiohttp import web
from adapters.api.keys import SERVICES

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()

_started = time.monotonic()


@routes.get("/")
async def index(request: web.Request) -> web.Response:
    return web.json_response({
        "message": "Riyadah Elite Backend is running",
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "endpoints": {
            "auth": "/api/auth",
            "tournaments": "/api/tournaments",
            "rewards": "/api/rewards",
            "activity": "/api/activity",
        },
    })


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    db_status = "disconnected"
    try:
        if await request.app[SERVICES].user_repo.ping():
            db_status = "connected"
    except Exception as e:
        logger.warning(f"Database connection test failed: {e}")

    return web.json_response({
        "status": "healthy",
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started, 3),
    })
