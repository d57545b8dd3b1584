"""Tests for registration, login and token authentication."""

import pytest

from core.domain.models import ActivityType, UserRole
from core.domain.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    ValidationError,
)


@pytest.mark.asyncio
class TestRegister:

    async def test_register_grants_welcome_bonus(self, services, store):
        result = await services.auth.register("Nasser", "nasser@example.com", "secret123")

        assert result.user.points == 100
        assert result.user.role == UserRole.USER
        assert result.token

        claims = services.auth.authenticate(result.token)
        assert claims.user_id == result.user.id
        assert claims.role == UserRole.USER
        assert claims.email == "nasser@example.com"
        assert claims.name == "Nasser"

        entries = [e for e in store.activity if e.user_id == result.user.id]
        assert len(entries) == 1
        assert entries[0].activity_type == ActivityType.REGISTRATION
        assert entries[0].points_change == 100

    async def test_password_is_hashed(self, services, store):
        result = await services.auth.register("Nasser", "nasser@example.com", "secret123")
        stored = store.users[result.user.id]
        assert stored.password != "secret123"
        assert stored.password.startswith("$2")
        assert "password" not in result.user.model_dump()

    async def test_email_is_normalized(self, services):
        result = await services.auth.register("Nasser", "  Nasser@Example.COM ", "secret123")
        assert result.user.email == "nasser@example.com"

    async def test_duplicate_email(self, services):
        await services.auth.register("Nasser", "nasser@example.com", "secret123")
        with pytest.raises(ConflictError) as exc:
            await services.auth.register("Other", "NASSER@example.com", "secret123")
        assert exc.value.message == "User already exists with this email"

    @pytest.mark.parametrize("username,email,password", [
        ("", "a@example.com", "secret123"),
        ("Nasser", "", "secret123"),
        ("Nasser", "a@example.com", ""),
        (None, None, None),
    ])
    async def test_missing_fields(self, services, username, email, password):
        with pytest.raises(ValidationError):
            await services.auth.register(username, email, password)

    async def test_password_over_72_bytes_rejected(self, services, store):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            await services.auth.register("alice", "alice@example.com", "x" * 80)
        assert store.users == {}

    async def test_multibyte_password_measured_in_bytes(self, services):
        # 37 two-byte characters = 74 bytes
        with pytest.raises(ValidationError):
            await services.auth.register("alice", "alice@example.com", "é" * 37)

    async def test_password_of_exactly_72_bytes(self, services):
        result = await services.auth.register("alice", "alice@example.com", "x" * 72)
        login = await services.auth.login("alice@example.com", "x" * 72)
        assert login.user.id == result.user.id

    async def test_short_password(self, services):
        with pytest.raises(ValidationError, match="at least 6"):
            await services.auth.register("Nasser", "nasser@example.com", "12345")

    async def test_bad_email(self, services):
        with pytest.raises(ValidationError):
            await services.auth.register("Nasser", "not-an-email", "secret123")

    async def test_short_username(self, services):
        with pytest.raises(ValidationError):
            await services.auth.register("N", "nasser@example.com", "secret123")


@pytest.mark.asyncio
class TestLogin:

    async def test_login_success(self, services, store):
        registered = await services.auth.register("Nasser", "nasser@example.com", "secret123")

        result = await services.auth.login("nasser@example.com", "secret123")

        assert result.user.id == registered.user.id
        assert services.auth.authenticate(result.token).user_id == registered.user.id
        logins = [e for e in store.activity if e.activity_type == ActivityType.LOGIN]
        assert len(logins) == 1
        assert logins[0].points_change == 0

    async def test_wrong_password_and_unknown_email_look_the_same(self, services):
        await services.auth.register("Nasser", "nasser@example.com", "secret123")

        with pytest.raises(AuthenticationError) as wrong_password:
            await services.auth.login("nasser@example.com", "wrong-password")
        with pytest.raises(AuthenticationError) as unknown_email:
            await services.auth.login("nobody@example.com", "secret123")

        assert wrong_password.value.code == unknown_email.value.code == "authentication_failed"
        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.status == unknown_email.value.status == 401

    async def test_over_long_password_fails_like_a_wrong_one(self, services):
        await services.auth.register("Nasser", "nasser@example.com", "secret123")
        with pytest.raises(AuthenticationError):
            await services.auth.login("nasser@example.com", "x" * 80)

    async def test_missing_credentials(self, services):
        with pytest.raises(ValidationError):
            await services.auth.login("", "")


class TestAuthenticate:

    def test_missing_token(self, services):
        with pytest.raises(InvalidTokenError):
            services.auth.authenticate(None)

    def test_garbage_token(self, services):
        with pytest.raises(InvalidTokenError):
            services.auth.authenticate("not.a.token")
