from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal
from pathlib import Path

from core.domain import constants


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Storage: chosen explicitly, never inferred from missing credentials
    storage_backend: Literal["supabase", "memory"] = "supabase"
    seed_memory_catalog: bool = False

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""
    db_schema: str = "public"
    db_timeout_seconds: float = 10.0

    # Sessions
    jwt_secret: str = ""
    jwt_algorithm: str = constants.JWT_ALGORITHM
    token_ttl_days: int = constants.TOKEN_TTL_DAYS
    bcrypt_rounds: int = 12

    # Points Ledger
    welcome_bonus: int = constants.WELCOME_BONUS
    tournament_join_points: int = constants.TOURNAMENT_JOIN_POINTS
    claim_retry_attempts: int = constants.CLAIM_RETRY_ATTEMPTS

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8080

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('storage_backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('claim_retry_attempts', 'token_ttl_days')
    @classmethod
    def at_least_one(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator('welcome_bonus', 'tournament_join_points')
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @property
    def supabase_credential(self) -> str:
        """Service key wins over the anon key"""
        return self.supabase_service_key or self.supabase_key

    def check_ready(self) -> None:
        """Fail fast on configuration the selected backend cannot run with"""
        missing = []
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        if self.storage_backend == "supabase":
            if not self.supabase_url:
                missing.append("SUPABASE_URL")
            if not self.supabase_credential:
                missing.append("SUPABASE_SERVICE_KEY (or SUPABASE_KEY)")
        if missing:
            raise RuntimeError(f"Missing required settings: {', '.join(missing)}")

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # SUPABASE_URL == supabase_url
    )


# Create settings instance
settings = Settings()
