"""
Middleware for the HTTP API.

- error_middleware: maps domain errors to JSON responses with stable codes
- ThrottlingMiddleware: rate limiting per client
- auth helpers: resolve the acting identity from the bearer token
"""

import time
import logging
from typing import Awaitable, Callable, Dict, List, Optional

from aiohttp import web

from core.domain.constants import (
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_SENSITIVE,
    RATE_LIMIT_INTERVAL_SECONDS,
)
from core.domain.errors import DomainError, InvalidTokenError, PermissionDeniedError
from core.domain.models import SessionClaims
from adapters.api.keys import SERVICES, CLAIMS_KEY

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def error_response(status: int, code: str, message: str) -> web.Response:
    return web.json_response({"error": code, "message": message}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn exceptions into JSON. Internal messages never reach the client."""
    try:
        return await handler(request)
    except DomainError as e:
        if e.status >= 500:
            logger.error(f"{request.method} {request.path} -> {e.code}: {e.message}")
        else:
            logger.info(f"{request.method} {request.path} -> {e.code}")
        return error_response(e.status, e.code, e.message)
    except web.HTTPNotFound:
        return error_response(404, "not_found", f"Route not found: {request.method} {request.path}")
    except web.HTTPMethodNotAllowed:
        return error_response(405, "method_not_allowed", f"Method not allowed: {request.method} {request.path}")
    except web.HTTPException:
        raise
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return error_response(500, "internal_error", "Something went wrong")


class ThrottlingMiddleware:
    """
    Simple rate limiter: tracks request timestamps per client.
    Rejects requests that exceed the limit within the interval.
    Per-process only; each instance counts its own traffic.
    """

    def __init__(
        self,
        default_limit: int = RATE_LIMIT_REQUESTS,
        interval: int = RATE_LIMIT_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_limit = default_limit
        self.interval = interval
        self.clock = clock
        # {client_key: [timestamp, timestamp, ...]}, never holds an empty list
        self._requests: Dict[str, List[float]] = {}
        self._last_sweep = clock()
        # Endpoints with stricter limits (credential guessing, claim spamming)
        self._strict_routes = {
            "/api/auth/login": RATE_LIMIT_SENSITIVE,
            "/api/auth/register": RATE_LIMIT_SENSITIVE,
            "/api/rewards/{reward_id}/claim": RATE_LIMIT_SENSITIVE,
        }

    def _route_of(self, request: web.Request) -> str:
        resource = request.match_info.route.resource
        return resource.canonical if resource is not None else request.path

    def _cleanup(self, key: str, now: float):
        """Remove expired timestamps, and the key once none are left."""
        cutoff = now - self.interval
        recent = [ts for ts in self._requests.get(key, ()) if ts > cutoff]
        if recent:
            self._requests[key] = recent
        else:
            self._requests.pop(key, None)

    def _sweep(self, now: float):
        """Drop clients that have not come back within the interval."""
        if now - self._last_sweep < self.interval:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._cleanup(key, now)

    @web.middleware
    async def middleware(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        route = self._route_of(request)
        key = f"{request.remote or 'unknown'}:{route}"
        now = self.clock()
        self._sweep(now)
        self._cleanup(key, now)

        limit = self._strict_routes.get(route, self.default_limit)
        if len(self._requests.get(key, ())) >= limit:
            logger.warning(f"Rate limit hit for {key} (limit={limit})")
            return error_response(429, "rate_limited", "Too many requests. Please wait a moment.")

        self._requests.setdefault(key, []).append(now)
        return await handler(request)


def bearer_token(request: web.Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_user(request: web.Request) -> SessionClaims:
    """Verified identity of the caller. Cached on the request."""
    claims = request.get(CLAIMS_KEY)
    if claims is None:
        token = bearer_token(request)
        if not token:
            raise InvalidTokenError("Authentication required")
        claims = request.app[SERVICES].auth.authenticate(token)
        request[CLAIMS_KEY] = claims
    return claims


def require_admin(request: web.Request) -> SessionClaims:
    claims = require_user(request)
    if not claims.is_admin:
        raise PermissionDeniedError()
    return claims
