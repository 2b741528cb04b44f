"""Authentication and profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import EmailStr, Field, model_validator

from recipe_finder.schemas.base import APIRequest, APIResponse


MIN_PASSWORD_LENGTH = 8


class RegisterRequest(APIRequest):
    """Request body for account registration."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=255)
    password_confirmation: str

    @model_validator(mode="after")
    def _passwords_match(self) -> Self:
        if self.password != self.password_confirmation:
            msg = "The password field confirmation does not match."
            raise ValueError(msg)
        return self


class LoginRequest(APIRequest):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(APIRequest):
    """Request body for a profile update.

    ``password`` is the current password and is only checked when
    ``new_password`` is given.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str | None = None
    new_password: str | None = Field(
        default=None, min_length=MIN_PASSWORD_LENGTH, max_length=255
    )

    @model_validator(mode="after")
    def _current_password_required(self) -> Self:
        if self.new_password and not self.password:
            msg = "The current password is required to set a new password."
            raise ValueError(msg)
        return self


class UserResponse(APIResponse):
    """Public view of a user."""

    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RegisterResponse(APIResponse):
    """Response body for a successful registration."""

    success: bool = True
    message: str
    user: UserResponse


class LoginResponse(APIResponse):
    """Response body for a successful login."""

    success: bool = True
    message: str
    user: UserResponse
    token: str


class MessageResponse(APIResponse):
    """Response body carrying only a status message."""

    success: bool = True
    message: str


class CurrentUserResponse(APIResponse):
    """Response body for the current user."""

    success: bool = True
    user: UserResponse


class ProfileResponse(APIResponse):
    """Response body for a successful profile update."""

    success: bool = True
    message: str
    user: UserResponse
