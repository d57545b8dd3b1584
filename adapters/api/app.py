"""
aiohttp application factory.
"""

import logging
from typing import Optional
from aiohttp import web
from adapters.api.keys import SERVICES
from adapters.api.loader import Services
from adapters.api.middleware import error_middleware, ThrottlingMiddleware
from adapters.api.handlers import routers

logger = logging.getLogger(__name__)


def create_app(
    services: Services,
    rate_limit: bool = True,
    throttle: Optional[ThrottlingMiddleware] = None,
) -> web.Application:
    middlewares = [error_middleware]
    if rate_limit:
        middlewares.append((throttle or ThrottlingMiddleware()).middleware)

    app = web.Application(middlewares=middlewares)
    app[SERVICES] = services
    for router in routers:
        app.router.add_routes(router)

    logger.info(f"HTTP API ready ({len(app.router.routes())} routes, rate_limit={rate_limit})")
    return app
