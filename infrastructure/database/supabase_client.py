"""
Supabase client initialization.
Single point of database connection and of storage error translation.
"""

from supabase import create_client, Client
from postgrest.exceptions import APIError
import asyncio
import concurrent.futures
import logging
import httpx
from functools import wraps
from typing import Optional

from config.settings import Settings
from core.domain.errors import ConflictError, RepositoryUnavailableError, StaleStateError

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"
# Postgres serialization_failure, raised by claim_reward() when a row moved
SERIALIZATION_FAILURE = "40001"

# Upper bound for a single storage call, set from settings in create_supabase_client()
_timeout_seconds = 10.0


def create_supabase_client(settings: Settings) -> Client:
    """Build the client for the configured project and schema"""
    global _timeout_seconds
    if not settings.supabase_url or not settings.supabase_credential:
        raise RuntimeError("Supabase credentials not configured: SUPABASE_URL, SUPABASE_SERVICE_KEY (or SUPABASE_KEY)")

    _timeout_seconds = settings.db_timeout_seconds

    # Schema isolation: staging may use its own schema, production uses public
    if settings.db_schema != "public":
        from supabase.lib.client_options import ClientOptions
        return create_client(
            settings.supabase_url, settings.supabase_credential,
            options=ClientOptions(schema=settings.db_schema)
        )
    return create_client(settings.supabase_url, settings.supabase_credential)


# Dedicated bounded thread pool for DB operations, prevents exhausting the
# default executor when many Supabase calls run concurrently.
_db_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=10,
    thread_name_prefix="supabase-db",
)


def run_sync(func):
    """
    Decorator to run synchronous Supabase operations in async context.
    Supabase Python SDK is synchronous, so we need this wrapper.
    Uses a dedicated bounded thread pool instead of the default executor.

    Timeouts and transport/API failures become RepositoryUnavailableError,
    unique violations become ConflictError, serialization failures become
    StaleStateError. Domain errors raised inside `func` pass through
    untouched.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(_db_executor, lambda: func(*args, **kwargs)),
                timeout=_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"[DB] {func.__name__} timed out after {_timeout_seconds}s")
            raise RepositoryUnavailableError() from e
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError("Record already exists") from e
            if e.code == SERIALIZATION_FAILURE:
                raise StaleStateError(e.message or "Row changed concurrently") from e
            logger.error(f"[DB] {func.__name__} failed: {e.code} {e.message}")
            raise RepositoryUnavailableError() from e
        except httpx.HTTPError as e:
            logger.error(f"[DB] {func.__name__} transport error: {e}")
            raise RepositoryUnavailableError() from e
    return wrapper


def first_row(response) -> Optional[dict]:
    return response.data[0] if response.data else None
