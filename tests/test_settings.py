"""Tests for Settings validation and readiness checks."""

import pytest
from pydantic import ValidationError

from config.settings import Settings


def make(**overrides):
    return Settings(_env_file=None, **overrides)


class TestSettings:

    def test_defaults(self):
        s = make()
        assert s.welcome_bonus == 100
        assert s.tournament_join_points == 10
        assert s.token_ttl_days == 7
        assert s.claim_retry_attempts == 3

    def test_backend_is_normalized(self):
        assert make(storage_backend=" Memory ").storage_backend == "memory"

    def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            make(storage_backend="mongodb")

    def test_negative_bonus_rejected(self):
        with pytest.raises(ValidationError):
            make(welcome_bonus=-1)

    def test_retry_attempts_at_least_one(self):
        with pytest.raises(ValidationError):
            make(claim_retry_attempts=0)

    def test_service_key_wins(self):
        s = make(supabase_key="anon", supabase_service_key="service")
        assert s.supabase_credential == "service"

    def test_supabase_requires_credentials(self):
        s = make(storage_backend="supabase", jwt_secret="x", supabase_url="", supabase_key="", supabase_service_key="")
        with pytest.raises(RuntimeError, match="SUPABASE_URL"):
            s.check_ready()

    def test_jwt_secret_required(self):
        s = make(storage_backend="memory", jwt_secret="")
        with pytest.raises(RuntimeError, match="JWT_SECRET"):
            s.check_ready()

    def test_memory_ready_without_supabase(self):
        make(storage_backend="memory", jwt_secret="x").check_ready()
