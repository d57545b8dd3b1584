"""
Auth service - registration, login and session token issuance.
Transport-agnostic: adapters pass plain fields and present raw bearer tokens.
"""

import logging
import re
from typing import Optional
from core.domain.models import (
    AuthResult, SessionClaims, UserCreate, UserRole, ActivityType,
)
from core.domain.constants import (
    EMAIL_PATTERN, MIN_PASSWORD_LENGTH, MAX_PASSWORD_BYTES, MIN_USERNAME_LENGTH, MAX_USERNAME_LENGTH,
    WELCOME_BONUS,
)
from core.domain.errors import AuthenticationError, ConflictError, ValidationError
from core.interfaces.repositories import IUserRepository
from core.interfaces.security import IPasswordHasher, ITokenService
from core.services.activity_service import ActivityService

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def _password_bytes(password: str) -> int:
    return len(password.encode("utf-8"))


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Session issuer: creates users, checks credentials, mints and verifies tokens"""

    def __init__(
        self,
        user_repo: IUserRepository,
        hasher: IPasswordHasher,
        tokens: ITokenService,
        activity: ActivityService,
        welcome_bonus: int = WELCOME_BONUS,
    ):
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens
        self.activity = activity
        self.welcome_bonus = welcome_bonus
        self._dummy_hash: Optional[str] = None

    async def register(self, username: Optional[str], email: Optional[str], password: Optional[str]) -> AuthResult:
        """Create an account with the welcome bonus and return a session"""
        username = (username or "").strip()
        email = normalize_email(email)
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")
        self.validate_username(username)
        if not _EMAIL_RE.match(email):
            raise ValidationError("Email address is not valid")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if _password_bytes(password) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if await self.user_repo.get_by_email(email):
            raise ConflictError("User already exists with this email")

        user = await self.user_repo.create(UserCreate(
            username=username,
            email=email,
            password=await self.hasher.hash(password),
            role=UserRole.USER,
            points=self.welcome_bonus,
        ))
        logger.info(f"[AUTH] registered user {user.id} with {self.welcome_bonus} welcome points")

        await self.activity.record(
            user_id=user.id,
            activity_type=ActivityType.REGISTRATION,
            description="User registered",
            points_change=self.welcome_bonus,
        )
        return AuthResult(token=self.tokens.issue(user), user=user.public())

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """Check credentials and return a session.

        Unknown email and wrong password raise the same error.
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")
        if _password_bytes(password) > MAX_PASSWORD_BYTES:
            # No stored password can be this long
            raise AuthenticationError()

        user = await self.user_repo.get_by_email(email)
        if not user:
            # Same hashing cost as a real check
            await self.hasher.verify(password, await self._get_dummy_hash())
            logger.info("[AUTH] login failed: unknown email")
            raise AuthenticationError()

        if not await self.hasher.verify(password, user.password):
            logger.info(f"[AUTH] login failed: bad password for user {user.id}")
            raise AuthenticationError()

        await self.activity.record(
            user_id=user.id,
            activity_type=ActivityType.LOGIN,
            description="User logged in",
        )
        return AuthResult(token=self.tokens.issue(user), user=user.public())

    def authenticate(self, token: Optional[str]) -> SessionClaims:
        """Resolve the acting identity from a bearer token"""
        return self.tokens.verify(token or "")

    def validate_username(self, username: str) -> None:
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self.hasher.hash("not-a-real-password")
        return self._dummy_hash
