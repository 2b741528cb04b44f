"""End-to-end journeys through the client stores and the real API.

The client gateway is mounted on the application with httpx's ASGI
transport, so every store call goes through routing, middleware, services
and the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
from httpx import ASGITransport

from recipe_finder.frontend import (
    ApiGateway,
    AuthStore,
    FavoritesStore,
    MemoryTabStorage,
    NotificationChannel,
    RecipeSearchStore,
    Router,
    SessionContext,
)
from tests.factories.settings import SettingsFactory
from tests.factories.spoonacular import SpoonacularRecipeFactory


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import respx
    from fastapi import FastAPI

    from recipe_finder.clients.spoonacular import SpoonacularClient
    from recipe_finder.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture
def settings() -> Settings:
    """Run the journeys with CSRF enforced, as a browser would see it."""
    return SettingsFactory.with_csrf()


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(MemoryTabStorage())


@pytest.fixture
def notifications() -> NotificationChannel:
    return NotificationChannel(clock=lambda: 0.0)


@pytest.fixture
async def gateway(app: FastAPI, session: SessionContext) -> AsyncIterator[ApiGateway]:
    async with ApiGateway(
        session, "http://test/api", transport=ASGITransport(app=app)
    ) as gateway:
        yield gateway


@pytest.fixture
def auth(
    session: SessionContext,
    gateway: ApiGateway,
    notifications: NotificationChannel,
) -> AuthStore:
    return AuthStore(session, gateway, notifications, Router(session, notifications))


class TestUserJourney:
    """A new user signs up, searches and saves recipes."""

    async def test_new_user_has_no_favorites(
        self,
        auth: AuthStore,
        gateway: ApiGateway,
        notifications: NotificationChannel,
    ) -> None:
        """Ava registers, logs in and sees an empty saved list."""
        signup = await auth.signup_user(
            "Ava", "ava@example.com", "password123", "password123"
        )
        assert signup.success, signup.message

        login = await auth.login_user("ava@example.com", "password123")
        assert login.success, login.message
        assert auth.user.name == "Ava"

        favorites = FavoritesStore(gateway, notifications)
        loaded = await favorites.load()

        assert loaded.success
        assert favorites.total == 0
        assert favorites.recipes == []

    async def test_search_and_save(
        self,
        auth: AuthStore,
        gateway: ApiGateway,
        notifications: NotificationChannel,
        spoonacular: respx.MockRouter,
        spoonacular_client: SpoonacularClient,
    ) -> None:
        spoonacular.get("/recipes/complexSearch").mock(
            return_value=httpx.Response(
                200,
                json={"results": [SpoonacularRecipeFactory.payload(title="Pasta Bake")]},
            )
        )
        await auth.signup_user("Liam", "liam@example.com", "password123", "password123")
        await auth.login_user("liam@example.com", "password123")

        search = RecipeSearchStore(gateway, notifications)
        await search.search("pasta")
        assert search.source == "api"
        (recipe,) = search.recipes

        favorites = FavoritesStore(gateway, notifications)
        saved = await favorites.save(recipe)
        duplicate = await favorites.save(recipe)

        assert saved.success
        assert not duplicate.success
        assert duplicate.message == "Recipe is already in your favorites"
        assert await favorites.check(recipe.id) is True

        await favorites.load()
        assert [r.title for r in favorites.recipes] == ["Pasta Bake"]

        removed = await favorites.remove(recipe.id)
        assert removed.success
        assert favorites.total == 0

    async def test_logout_revokes_server_token(
        self,
        auth: AuthStore,
        session: SessionContext,
        client: httpx.AsyncClient,
    ) -> None:
        await auth.signup_user("Maya", "maya@example.com", "password123", "password123")
        await auth.login_user("maya@example.com", "password123")
        token = session.token

        await auth.logout_user()

        assert not auth.is_logged_in
        response = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    async def test_wrong_password_is_reported(
        self,
        auth: AuthStore,
        notifications: NotificationChannel,
    ) -> None:
        await auth.signup_user("Noah", "noah@example.com", "password123", "password123")

        result = await auth.login_user("noah@example.com", "wrong-password")

        assert not result.success
        assert result.message == "Invalid credentials"
        assert notifications.message == "❌ Invalid credentials"


class TestFirstVisitOverHttp:
    """The same first visit, asserted on the raw responses."""

    async def test_register_login_and_empty_favorites(
        self, client: httpx.AsyncClient
    ) -> None:
        registered = await client.post(
            "/api/auth/register",
            json={
                "name": "Ava",
                "email": "ava@example.com",
                "password": "password123",
                "password_confirmation": "password123",
            },
        )
        assert registered.status_code == 201

        logged_in = await client.post(
            "/api/auth/login",
            json={"email": "ava@example.com", "password": "password123"},
        )
        assert logged_in.status_code == 200
        token = logged_in.json()["token"]
        assert token

        response = await client.get(
            "/api/favorites", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 0
        assert body["data"] == []
        assert body["total"] == 0
