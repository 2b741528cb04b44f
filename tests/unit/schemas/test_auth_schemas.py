"""Unit tests for request schemas.

Tests cover:
- Registration validation
- Profile update validation
- Favorite request validation
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from recipe_finder.schemas.auth import (
    MIN_PASSWORD_LENGTH,
    RegisterRequest,
    UpdateProfileRequest,
)
from recipe_finder.schemas.favorite import MAX_RECIPE_ID, FavoriteRequest
from tests.factories.auth import RegisterRequestFactory


pytestmark = pytest.mark.unit


class TestRegisterRequest:
    """Tests for RegisterRequest."""

    def test_valid(self) -> None:
        body = RegisterRequest.model_validate(RegisterRequestFactory.payload())

        assert body.password == body.password_confirmation

    def test_strips_whitespace(self) -> None:
        body = RegisterRequest.model_validate(
            RegisterRequestFactory.payload(name="  Ava  ")
        )

        assert body.name == "Ava"

    def test_confirmation_mismatch(self) -> None:
        payload = RegisterRequestFactory.payload()
        payload["password_confirmation"] = "something-else"

        with pytest.raises(ValidationError, match="confirmation does not match"):
            RegisterRequest.model_validate(payload)

    def test_short_password(self) -> None:
        payload = RegisterRequestFactory.payload()
        payload["password"] = payload["password_confirmation"] = "short"

        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(payload)

    def test_password_length_boundary(self) -> None:
        payload = RegisterRequestFactory.payload()
        payload["password"] = payload["password_confirmation"] = "p" * MIN_PASSWORD_LENGTH

        assert RegisterRequest.model_validate(payload).password == payload["password"]

        payload["password"] = payload["password_confirmation"] = "p" * (
            MIN_PASSWORD_LENGTH - 1
        )
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(payload)

    def test_invalid_email(self) -> None:
        payload = RegisterRequestFactory.payload()
        payload["email"] = "not-an-email"

        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(payload)

    def test_blank_name(self) -> None:
        payload = RegisterRequestFactory.payload()
        payload["name"] = "   "

        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(payload)


class TestUpdateProfileRequest:
    """Tests for UpdateProfileRequest."""

    def test_name_and_email_only(self) -> None:
        body = UpdateProfileRequest(name="Ava", email="ava@example.com")

        assert body.password is None
        assert body.new_password is None

    def test_new_password_requires_current(self) -> None:
        with pytest.raises(ValidationError, match="current password is required"):
            UpdateProfileRequest(
                name="Ava", email="ava@example.com", new_password="new-password"
            )

    def test_new_password_min_length(self) -> None:
        with pytest.raises(ValidationError):
            UpdateProfileRequest(
                name="Ava",
                email="ava@example.com",
                password="old-password",
                new_password="short",
            )


class TestFavoriteRequest:
    """Tests for FavoriteRequest."""

    @pytest.mark.parametrize("recipe_id", [0, -1, MAX_RECIPE_ID + 1, 10**20])
    def test_recipe_id_out_of_range(self, recipe_id: int) -> None:
        with pytest.raises(ValidationError):
            FavoriteRequest(recipe_id=recipe_id)

    def test_largest_recipe_id(self) -> None:
        assert FavoriteRequest(recipe_id=MAX_RECIPE_ID).recipe_id == MAX_RECIPE_ID

    def test_ignores_unknown_fields(self) -> None:
        assert FavoriteRequest.model_validate({"recipe_id": 3, "x": 1}).recipe_id == 3
