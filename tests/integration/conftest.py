"""Integration test fixtures.

Each test gets a fresh application over an in-memory SQLite database, driven
through httpx's ASGI transport. Spoonacular is mocked with respx.

ASGITransport does not run the lifespan, so fixtures install and initialize
the Spoonacular client on ``app.state`` themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import respx
from httpx import ASGITransport, AsyncClient

from recipe_finder.clients.spoonacular import SpoonacularClient
from recipe_finder.core.rate_limit import limiter
from recipe_finder.factory import create_app
from tests.factories.auth import DEFAULT_PASSWORD, RegisterRequestFactory
from tests.factories.settings import SPOONACULAR_TEST_URL


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

    from fastapi import FastAPI

    from recipe_finder.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> Iterator[None]:
    """The limiter is process-wide; start every test with empty counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def app(settings: Settings) -> Iterator[FastAPI]:
    """Create the FastAPI application under test."""
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def spoonacular() -> Iterator[respx.MockRouter]:
    """Mock router for the Spoonacular API."""
    with respx.mock(base_url=SPOONACULAR_TEST_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
async def spoonacular_client(
    app: FastAPI,
    spoonacular: respx.MockRouter,
) -> AsyncIterator[SpoonacularClient]:
    """Install an initialized Spoonacular client the way the lifespan would."""
    client = SpoonacularClient(api_key="test-key", base_url=SPOONACULAR_TEST_URL)
    await client.initialize()
    app.state.spoonacular_client = client
    yield client
    await client.shutdown()
    app.state.spoonacular_client = None


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Register an account and return the registration payload."""

    async def _register(**fields: Any) -> dict[str, Any]:
        payload = RegisterRequestFactory.payload(**fields)
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return payload

    return _register


@pytest.fixture
def login(client: AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Log in and return the Authorization header."""

    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
async def auth_headers(
    register: Callable[..., Awaitable[dict[str, Any]]],
    login: Callable[..., Awaitable[dict[str, str]]],
) -> dict[str, str]:
    """Headers of a freshly registered and logged-in user."""
    payload = await register()
    return await login(payload["email"])
