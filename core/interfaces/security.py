"""
Security interfaces - abstractions for the credential store.
Allows swapping the hashing primitive (bcrypt, argon2, ...) or the token format.
"""

from abc import ABC, abstractmethod
from core.domain.models import User, SessionClaims


class IPasswordHasher(ABC):
    """One-way password hashing"""

    @abstractmethod
    async def hash(self, password: str) -> str:
        """Hash a plain password"""
        pass

    @abstractmethod
    async def verify(self, password: str, hashed: str) -> bool:
        """Check a plain password against a stored hash. Never raises on bad hashes."""
        pass


class ITokenService(ABC):
    """Signed, expiring identity tokens"""

    @abstractmethod
    def issue(self, user: User) -> str:
        """Mint a token carrying user id, role, email and display name"""
        pass

    @abstractmethod
    def verify(self, token: str) -> SessionClaims:
        """Decode and verify a token.

        Raises InvalidTokenError for malformed/forged tokens and
        ExpiredTokenError past the validity window.
        """
        pass
