"""
bcrypt password hashing.
"""

import asyncio
import logging
import bcrypt
from core.interfaces.security import IPasswordHasher

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt-based hasher. Hashing is CPU-bound, so it runs off the event loop."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def _hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def _verify_sync(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Stored password hash is malformed")
            return False

    async def hash(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._verify_sync, password, hashed)
