from infrastructure.security.passwords import BcryptPasswordHasher
from infrastructure.security.tokens import JwtTokenService

__all__ = [
    "BcryptPasswordHasher",
    "JwtTokenService",
]
