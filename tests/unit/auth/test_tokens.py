"""Unit tests for JWT bearer tokens.

Tests cover:
- Token creation and claims
- Decoding, expiry and tampering
- Password hashing
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from jose import jwt

from recipe_finder.auth.passwords import hash_password, verify_password
from recipe_finder.auth.tokens import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    create_access_token,
    decode_token,
)
from recipe_finder.core.config import Settings
from tests.factories.settings import TEST_JWT_SECRET, SettingsFactory


pytestmark = pytest.mark.unit


class TestCreateAccessToken:
    """Tests for create_access_token."""

    def test_round_trips_claims(self, settings: Settings) -> None:
        issued = create_access_token("42", settings=settings)

        payload = decode_token(issued.token, settings=settings)

        assert payload.sub == "42"
        assert payload.jti == issued.jti
        assert payload.type == "access"

    @freeze_time("2026-03-01 12:00:00")
    def test_uses_configured_lifetime(self, settings: Settings) -> None:
        issued = create_access_token("1", settings=settings)

        expected = datetime(2026, 3, 1, 12, 0, tzinfo=UTC) + timedelta(
            minutes=settings.auth.jwt.access_token_expire_minutes
        )
        assert issued.expires_at == expected

    def test_each_token_gets_a_new_jti(self, settings: Settings) -> None:
        first = create_access_token("1", settings=settings)
        second = create_access_token("1", settings=settings)

        assert first.jti != second.jti
        assert first.token != second.token

    def test_explicit_jti(self, settings: Settings) -> None:
        issued = create_access_token("1", settings=settings, jti="fixed")

        assert decode_token(issued.token, settings=settings).jti == "fixed"

    def test_requires_secret(self) -> None:
        """Should refuse to sign with an empty key."""
        settings = SettingsFactory.build(JWT_SECRET_KEY="")

        with pytest.raises(TokenError):
            create_access_token("1", settings=settings)


class TestDecodeToken:
    """Tests for decode_token."""

    def test_expired_token(self, settings: Settings) -> None:
        issued = create_access_token(
            "1", settings=settings, expires_delta=timedelta(seconds=-10)
        )

        with pytest.raises(TokenExpiredError):
            decode_token(issued.token, settings=settings)

    def test_wrong_signature(self, settings: Settings) -> None:
        issued = create_access_token("1", settings=settings)
        other = SettingsFactory.build(JWT_SECRET_KEY="another-secret-of-enough-length")

        with pytest.raises(TokenInvalidError):
            decode_token(issued.token, settings=other)

    def test_garbage(self, settings: Settings) -> None:
        with pytest.raises(TokenInvalidError):
            decode_token("not-a-jwt", settings=settings)

    def test_wrong_type(self, settings: Settings) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "1",
                "exp": now + timedelta(minutes=5),
                "iat": now,
                "jti": "x",
                "type": "refresh",
            },
            TEST_JWT_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError, match="token type"):
            decode_token(token, settings=settings)

    def test_missing_jti(self, settings: Settings) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "exp": now + timedelta(minutes=5), "iat": now, "type": "access"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            decode_token(token, settings=settings)


class TestPasswords:
    """Tests for bcrypt password hashing."""

    def test_verify_matching_password(self) -> None:
        password_hash = hash_password("s3cret-pass")

        assert password_hash != "s3cret-pass"
        assert verify_password("s3cret-pass", password_hash)

    def test_reject_wrong_password(self) -> None:
        assert not verify_password("nope", hash_password("s3cret-pass"))

    def test_malformed_hash_is_a_mismatch(self) -> None:
        assert verify_password("s3cret-pass", "not-a-bcrypt-hash") is False

    def test_salted(self) -> None:
        assert hash_password("same") != hash_password("same")
