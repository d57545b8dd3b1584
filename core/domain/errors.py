"""
Domain errors - the full failure taxonomy of the platform.

Every error carries a stable machine-readable `code` and an HTTP `status`
so adapters can report it without leaking internal messages.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for all business and infrastructure errors"""

    code = "domain_error"
    status = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(DomainError):
    code = "validation_error"
    default_message = "Invalid input"


class ConflictError(DomainError):
    code = "conflict"
    status = 409
    default_message = "Conflicting request, please retry"


class AuthenticationError(DomainError):
    code = "authentication_failed"
    status = 401
    default_message = "Invalid email or password"


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = 401
    default_message = "Invalid token"


class ExpiredTokenError(DomainError):
    code = "token_expired"
    status = 401
    default_message = "Token has expired"


class PermissionDeniedError(DomainError):
    code = "forbidden"
    status = 403
    default_message = "Admin access required"


class NotFoundError(DomainError):
    """Referenced entity is absent. Code is derived from the entity name."""

    status = 404

    def __init__(self, entity: str, message: Optional[str] = None):
        self.entity = entity
        self.code = f"{entity}_not_found"
        super().__init__(message or f"{entity.capitalize()} not found")


class InsufficientBalanceError(DomainError):
    code = "insufficient_points"
    default_message = "Insufficient points"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient points: {required} required, {available} available")


class OutOfStockError(DomainError):
    code = "out_of_stock"
    status = 409
    default_message = "Reward out of stock"


class StaleStateError(DomainError):
    """A conditional write found a different value than the one read."""

    code = "stale_state"
    status = 409
    default_message = "State changed concurrently"


class RepositoryUnavailableError(DomainError):
    code = "repository_unavailable"
    status = 503
    default_message = "Storage temporarily unavailable"
