"""Authentication and profile endpoints.

Provides:
- Registration and login (rate limited per client IP)
- Logout (revokes the presented bearer token only)
- Current user and profile update

Annotations here are evaluated eagerly: the rate limit decorator wraps the
endpoint, and FastAPI resolves the wrapped signature in this module's globals.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from recipe_finder.api.dependencies import get_user_service
from recipe_finder.auth.dependencies import CurrentAuth, CurrentUser
from recipe_finder.core.rate_limit import rate_limit_auth
from recipe_finder.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    UpdateProfileRequest,
    UserResponse,
)
from recipe_finder.services.users import UserService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={409: {"description": "Email already taken"}},
)
@rate_limit_auth()
def register(
    request: Request,
    body: RegisterRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> RegisterResponse:
    """Create an account. The new user still has to log in."""
    user = users.register(body.name, body.email, body.password)
    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    responses={401: {"description": "Invalid credentials"}},
)
@rate_limit_auth()
def login(
    request: Request,
    body: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> LoginResponse:
    """Check credentials and issue a new bearer token."""
    user = users.authenticate(body.email, body.password)
    token = users.issue_token(user)
    return LoginResponse(
        message="Logged in successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
)
def logout(
    auth: CurrentAuth,
    users: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    """Revoke the bearer token used for this request."""
    users.revoke_token(auth.access_token)
    return MessageResponse(message="Logged out")


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Current user",
)
def me(user: CurrentUser) -> CurrentUserResponse:
    """Return the authenticated user."""
    return CurrentUserResponse(user=UserResponse.model_validate(user))


@router.post(
    "/update",
    response_model=ProfileResponse,
    summary="Update profile",
    responses={
        400: {"description": "Current password is incorrect"},
        409: {"description": "Email already taken"},
    },
)
def update_profile(
    body: UpdateProfileRequest,
    user: CurrentUser,
    users: Annotated[UserService, Depends(get_user_service)],
) -> ProfileResponse:
    """Update name and email, and the password when a new one is given."""
    updated = users.update_profile(
        user,
        name=body.name,
        email=body.email,
        password=body.password,
        new_password=body.new_password,
    )
    return ProfileResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(updated),
    )
