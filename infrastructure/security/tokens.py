"""
JWT session tokens (PyJWT, HMAC-signed).

Payload: sub (user id), role, email, name, iat, exp.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import UUID

import jwt

from core.domain.constants import JWT_ALGORITHM, TOKEN_TTL_DAYS
from core.domain.errors import ExpiredTokenError, InvalidTokenError
from core.domain.models import SessionClaims, User, UserRole
from core.interfaces.security import ITokenService

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenService(ITokenService):
    """Issues and verifies signed session tokens"""

    def __init__(
        self,
        secret: str,
        algorithm: str = JWT_ALGORITHM,
        ttl_days: int = TOKEN_TTL_DAYS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(days=ttl_days)
        self._clock = clock or _utcnow

    def issue(self, user: User) -> str:
        now = self._clock()
        payload = {
            "sub": str(user.id),
            "role": user.role.value,
            "email": user.email,
            "name": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        if not token:
            raise InvalidTokenError("Authentication required")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError() from e

        # Expiry is checked here against our clock so it can be controlled in tests
        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            user_id = UUID(str(payload["sub"]))
            role = UserRole(payload["role"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError() from e

        if self._clock() >= expires_at:
            raise ExpiredTokenError()

        return SessionClaims(
            user_id=user_id,
            role=role,
            email=payload.get("email"),
            name=payload.get("name"),
            issued_at=issued_at,
            expires_at=expires_at,
        )
