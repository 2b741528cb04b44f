"""Unit tests for the HTTP middleware stack.

Tests cover:
- Request id propagation and validation
- Security headers
- Timing header
- Client IP extraction
- Double-submit CSRF check
"""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from recipe_finder.core.config.settings import CsrfSettings
from recipe_finder.core.middleware import (
    CSRFMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from recipe_finder.core.middleware.csrf import generate_csrf_token
from recipe_finder.core.middleware.logging import get_client_ip
from recipe_finder.observability.logging import get_context


pytestmark = pytest.mark.unit


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/api/ping")
    async def ping(request: Request) -> dict[str, object]:
        return {
            "request_id": request.state.request_id,
            "context": get_context(),
        }

    @app.post("/api/things")
    async def create_thing() -> dict[str, bool]:
        return {"created": True}

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"ok": "yes"}

    return app


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _app()
        app.add_middleware(RequestIDMiddleware)
        return TestClient(app)

    def test_generates_uuid_when_missing(self, client: TestClient) -> None:
        response = client.get("/api/ping")

        request_id = response.headers["X-Request-ID"]
        assert uuid.UUID(request_id)
        assert response.json()["request_id"] == request_id

    def test_propagates_valid_incoming_id(self, client: TestClient) -> None:
        response = client.get("/api/ping", headers={"X-Request-ID": "trace-42.a_b"})

        assert response.headers["X-Request-ID"] == "trace-42.a_b"

    def test_replaces_malformed_incoming_id(self, client: TestClient) -> None:
        """Should not echo ids carrying characters outside the safe set."""
        response = client.get(
            "/api/ping", headers={"X-Request-ID": "bad id\" injected"}
        )

        assert response.headers["X-Request-ID"] != "bad id\" injected"
        assert uuid.UUID(response.headers["X-Request-ID"])

    def test_binds_logging_context(self, client: TestClient) -> None:
        response = client.get("/api/ping", headers={"X-Request-ID": "ctx-1"})

        assert response.json()["context"] == {"request_id": "ctx-1"}


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    def test_sets_hardening_headers(self) -> None:
        app = _app()
        app.add_middleware(SecurityHeadersMiddleware)
        response = TestClient(app).get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'self'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers

    def test_api_responses_are_not_cached(self) -> None:
        app = _app()
        app.add_middleware(SecurityHeadersMiddleware)
        client = TestClient(app)

        assert client.get("/api/ping").headers["Cache-Control"] == "no-store"
        assert "Cache-Control" not in client.get("/").headers

    def test_hsts_when_enabled(self) -> None:
        app = _app()
        app.add_middleware(SecurityHeadersMiddleware, hsts=True)
        response = TestClient(app).get("/")

        assert response.headers["Strict-Transport-Security"].startswith("max-age=")


class TestTimingMiddleware:
    """Tests for TimingMiddleware."""

    def test_adds_process_time_header(self) -> None:
        app = _app()
        app.add_middleware(TimingMiddleware)
        response = TestClient(app).get("/")

        assert response.headers["X-Process-Time"].endswith("ms")


class TestGetClientIp:
    """Tests for get_client_ip."""

    def _request(self, headers: dict[str, str], host: str | None = "10.0.0.9"):
        request = MagicMock()
        request.headers = headers
        request.client = MagicMock(host=host) if host else None
        return request

    def test_prefers_first_forwarded_for(self) -> None:
        request = self._request({"x-forwarded-for": "1.2.3.4, 10.0.0.1"})

        assert get_client_ip(request) == "1.2.3.4"

    def test_falls_back_to_real_ip(self) -> None:
        assert get_client_ip(self._request({"x-real-ip": "5.6.7.8"})) == "5.6.7.8"

    def test_falls_back_to_peer(self) -> None:
        assert get_client_ip(self._request({})) == "10.0.0.9"

    def test_unknown_without_client(self) -> None:
        assert get_client_ip(self._request({}, host=None)) == "unknown"


class TestCSRFMiddleware:
    """Tests for CSRFMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _app()
        app.add_middleware(CSRFMiddleware, settings=CsrfSettings(enabled=True))
        return TestClient(app)

    def test_safe_methods_pass(self, client: TestClient) -> None:
        client.cookies.set("XSRF-TOKEN", "cookie-token")

        assert client.get("/api/ping").status_code == 200

    def test_unsafe_without_cookie_passes(self, client: TestClient) -> None:
        """Bearer-only clients that never fetched the cookie are not blocked."""
        assert client.post("/api/things").status_code == 200

    def test_matching_header_passes(self, client: TestClient) -> None:
        client.cookies.set("XSRF-TOKEN", "cookie-token")

        response = client.post("/api/things", headers={"X-CSRF-TOKEN": "cookie-token"})

        assert response.status_code == 200

    def test_alternate_header_name_passes(self, client: TestClient) -> None:
        client.cookies.set("XSRF-TOKEN", "cookie-token")

        response = client.post("/api/things", headers={"X-XSRF-TOKEN": "cookie-token"})

        assert response.status_code == 200

    def test_missing_header_is_rejected(self, client: TestClient) -> None:
        client.cookies.set("XSRF-TOKEN", "cookie-token")

        response = client.post("/api/things")

        assert response.status_code == 403
        assert response.json()["error"] == "CSRF_TOKEN_MISMATCH"

    def test_mismatched_header_is_rejected(self, client: TestClient) -> None:
        client.cookies.set("XSRF-TOKEN", "cookie-token")

        response = client.post("/api/things", headers={"X-CSRF-TOKEN": "other"})

        assert response.status_code == 403
        assert response.json()["message"] == "CSRF token mismatch."

    def test_generated_tokens_are_unique(self) -> None:
        assert generate_csrf_token() != generate_csrf_token()
