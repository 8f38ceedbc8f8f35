"""
Tests for configuration, logging helpers and app construction.
"""

import asyncio
import logging
import threading
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from invoice_api.core.config import DEFAULT_JWT_SECRET, Settings
from invoice_api.domain.invoicing.ports import PasswordHasher
from invoice_api.infrastructure.security.passwords import BcryptPasswordHasher
from invoice_api.interfaces.dependencies import AppState
from invoice_api.shared.logging import format_access_line


@pytest.fixture
def access_lines():
    """Collect access-log lines written while the test runs."""
    lines = []

    class Collector(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            lines.append(record.getMessage())

    access_logger = logging.getLogger("invoice_api.access")
    handler = Collector()
    previous = access_logger.level
    access_logger.addHandler(handler)
    access_logger.setLevel(logging.INFO)
    yield lines
    access_logger.removeHandler(handler)
    access_logger.setLevel(previous)


class GatedHasher(PasswordHasher):
    """Hasher whose verify() waits until the test releases it."""

    def __init__(self) -> None:
        self._inner = BcryptPasswordHasher(rounds=4)
        self.entered = threading.Event()
        self.release = threading.Event()

    def hash(self, password: str) -> str:
        return self._inner.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        self.entered.set()
        self.release.wait(timeout=5)
        return self._inner.verify(password, hashed)


class TestSettings:
    """Tests for environment-driven Settings."""

    def test_defaults(self, monkeypatch) -> None:
        """Unset variables fall back to the documented defaults."""
        for name in ("APP_MODE", "GIN_MODE", "PORT", "RATE_LIMIT", "JWT_SECRET"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.rate_limit == "60/minute"
        assert settings.frontend_url == "http://localhost:8080"
        assert settings.debug
        assert settings.uses_default_secret

    def test_gin_mode_alias(self, monkeypatch) -> None:
        """GIN_MODE is accepted as the run mode."""
        monkeypatch.delenv("APP_MODE", raising=False)
        monkeypatch.setenv("GIN_MODE", "release")
        settings = Settings(_env_file=None)
        assert settings.app_mode == "release"
        assert not settings.debug

    def test_environment_overrides(self, monkeypatch) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("PORT", "8081")
        monkeypatch.setenv("JWT_SECRET", "s3cret")
        settings = Settings(_env_file=None)
        assert settings.port == 8081
        assert settings.jwt_secret != DEFAULT_JWT_SECRET


class TestAccessLog:
    """Tests for the access-log line and middleware."""

    def test_format(self) -> None:
        """The line carries IP, RFC1123 time, request, status, latency and agent."""
        line = format_access_line(
            client_ip="198.51.100.7",
            method="GET",
            path="/health",
            protocol="HTTP/1.1",
            status_code=200,
            latency_ms=1.5,
            user_agent="curl/8.0",
            when=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        )
        assert line.startswith("198.51.100.7 - [Sun, 01 Mar 2026 12:00:00 GMT]")
        assert '"GET /health HTTP/1.1 200 1.500ms "curl/8.0""' in line

    def test_middleware_writes_one_line_per_request(
        self, client: TestClient, access_lines: list
    ) -> None:
        """Each request produces exactly one access line."""
        client.get("/health")
        assert len(access_lines) == 1
        assert "GET /health" in access_lines[0]
        assert " 200 " in access_lines[0]


class TestFailureRecovery:
    """Failures inside the pipeline still pass through logging and CORS."""

    def test_stage_failure_is_logged_and_keeps_cors(
        self,
        client: TestClient,
        state: AppState,
        settings: Settings,
        user_headers: dict,
        access_lines: list,
        monkeypatch,
    ) -> None:
        """An identity lookup crash becomes a 500 with CORS headers and an access line."""

        def lookup_down(user_id: int):
            raise RuntimeError("identity store unavailable")

        monkeypatch.setattr(state.identities, "find_identity", lookup_down)
        response = client.get(
            "/api/clients", headers={**user_headers, "Origin": settings.frontend_url}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == settings.frontend_url
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert len(access_lines) == 1
        assert " 500 " in access_lines[0]


class TestConcurrency:
    """Password hashing must not stall the event loop."""

    @pytest.mark.asyncio
    async def test_login_does_not_block_other_requests(self, make_app) -> None:
        """/health answers while a login is still checking its password."""
        hasher = GatedHasher()
        app = make_app(hasher=hasher)
        app.state.invoice_api.services.accounts.register("slow@example.com", "Slow", "secret1")

        transport = httpx.ASGITransport(app=app)
        try:
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
                login = asyncio.create_task(
                    http.post(
                        "/api/auth/login",
                        json={"email": "slow@example.com", "password": "secret1"},
                    )
                )
                assert await asyncio.to_thread(hasher.entered.wait, 5)

                health = await http.get("/health")
                assert health.status_code == 200
                assert not login.done()

                hasher.release.set()
                response = await login
        finally:
            hasher.release.set()
        assert response.status_code == 200


class TestCreateApp:
    """Tests for the create_app() factory."""

    def test_bootstrap_admin_from_settings(self, make_app) -> None:
        """ADMIN_EMAIL and ADMIN_PASSWORD create a usable administrator."""
        app = make_app(admin_email="Boss@Example.com", admin_password="bootstrap-pass")
        with TestClient(app) as client:
            response = client.post(
                "/api/auth/login",
                json={"email": "boss@example.com", "password": "bootstrap-pass"},
            )
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"

    def test_apps_do_not_share_state(self, make_app) -> None:
        """Each app gets its own store."""
        first, second = make_app(), make_app()
        first.state.invoice_api.services.clients.create(None, {"name": "Only here"})
        assert len(second.state.invoice_api.store.clients) == 0

    def test_uploads_dir_created_on_startup_only(self, make_app, tmp_path) -> None:
        """Building the app touches no files; starting it creates the uploads dir."""
        uploads = tmp_path / "files" / "nested"
        app = make_app(uploads_dir=str(uploads))
        assert not uploads.exists()

        with TestClient(app):
            assert uploads.is_dir()
