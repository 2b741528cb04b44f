"""Integration tests for the auth endpoints.

Tests cover:
- Registration, duplicate emails and validation
- Login, current user and logout (token revocation)
- Profile updates
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.factories.auth import DEFAULT_PASSWORD, RegisterRequestFactory


if TYPE_CHECKING:
    from httpx import AsyncClient


pytestmark = pytest.mark.integration



class TestRegister:
    """Tests for POST /api/auth/register."""

    async def test_register(self, client: AsyncClient) -> None:
        payload = RegisterRequestFactory.payload(name="Ava", email="Ava@Example.com")

        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["user"]["name"] == "Ava"
        assert body["user"]["email"] == "ava@example.com"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    async def test_duplicate_email(self, client: AsyncClient, register) -> None:
        payload = await register()

        response = await client.post(
            "/api/auth/register",
            json=RegisterRequestFactory.payload(email=payload["email"].upper()),
        )

        assert response.status_code == 409
        body = response.json()
        assert body["message"] == "The email has already been taken."
        assert body["details"][0]["field"] == "email"

    async def test_password_confirmation_mismatch(self, client: AsyncClient) -> None:
        payload = RegisterRequestFactory.payload()
        payload["password_confirmation"] = "different-password"

        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_missing_fields(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/register", json={"name": "Ava"})

        assert response.status_code == 422
        fields = {d["field"] for d in response.json()["details"]}
        assert {"email", "password", "password_confirmation"} <= fields


class TestLogin:
    """Tests for login, current user and logout."""

    async def test_login_returns_token(self, client: AsyncClient, register) -> None:
        payload = await register()

        response = await client.post(
            "/api/auth/login",
            json={"email": payload["email"], "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Logged in successfully"
        assert body["token"]
        assert body["user"]["email"] == payload["email"].lower()

    async def test_wrong_password(self, client: AsyncClient, register) -> None:
        payload = await register()

        response = await client.post(
            "/api/auth/login",
            json={"email": payload["email"], "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_me(self, client: AsyncClient, register, login) -> None:
        payload = await register(name="Liam")
        headers = await login(payload["email"])

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Liam"

    async def test_me_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthenticated"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_logout_revokes_only_that_token(
        self, client: AsyncClient, register, login
    ) -> None:
        """Logging out on one device leaves the other signed in."""
        payload = await register()
        laptop = await login(payload["email"])
        phone = await login(payload["email"])

        response = await client.post("/api/auth/logout", headers=laptop)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out"
        assert (await client.get("/api/auth/me", headers=laptop)).status_code == 401
        assert (await client.get("/api/auth/me", headers=phone)).status_code == 200


class TestUpdateProfile:
    """Tests for POST /api/auth/update."""

    async def test_update_name_and_email(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/api/auth/update",
            json={"name": "Renamed", "email": "renamed@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["user"]["name"] == "Renamed"
        assert body["user"]["email"] == "renamed@example.com"

    async def test_change_password(self, client: AsyncClient, register, login) -> None:
        payload = await register()
        headers = await login(payload["email"])

        response = await client.post(
            "/api/auth/update",
            json={
                "name": payload["name"],
                "email": payload["email"],
                "password": DEFAULT_PASSWORD,
                "new_password": "brand-new-password",
            },
            headers=headers,
        )

        assert response.status_code == 200
        await login(payload["email"], "brand-new-password")

    async def test_wrong_current_password(
        self, client: AsyncClient, register, login
    ) -> None:
        payload = await register()
        headers = await login(payload["email"])

        response = await client.post(
            "/api/auth/update",
            json={
                "name": "Renamed",
                "email": payload["email"],
                "password": "not-my-password",
                "new_password": "brand-new-password",
            },
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"
        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["user"]["name"] == payload["name"]

    async def test_email_taken(self, client: AsyncClient, register, login) -> None:
        taken = await register()
        payload = await register()
        headers = await login(payload["email"])

        response = await client.post(
            "/api/auth/update",
            json={"name": "Me", "email": taken["email"]},
            headers=headers,
        )

        assert response.status_code == 409

    async def test_new_password_without_current(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/api/auth/update",
            json={
                "name": "Me",
                "email": "me@example.com",
                "new_password": "brand-new-password",
            },
            headers=auth_headers,
        )

        assert response.status_code == 422
