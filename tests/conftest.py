"""
Shared fixtures.

Every test gets its own app built by create_app() with isolated
settings, an empty in-memory store, a fast bcrypt work factor and a
controllable rate-limit clock.
"""

from collections.abc import Callable, Iterator
from typing import Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from invoice_api.core.config import Settings
from invoice_api.domain.invoicing.entities import User
from invoice_api.domain.invoicing.ports import PasswordHasher
from invoice_api.infrastructure.persistence.memory import InMemoryStore
from invoice_api.infrastructure.security.passwords import BcryptPasswordHasher
from invoice_api.interfaces.dependencies import AppState
from invoice_api.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "user-pass"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "uploads_dir": str(tmp_path / "uploads"),
        "rate_limit": "1000/minute",
        "jwt_secret": "test-secret",
        "log_level": "WARNING",
        "app_mode": "debug",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_app(tmp_path, clock: FakeClock) -> Callable[..., FastAPI]:
    """Factory for apps with extra setting overrides, sharing the test clock."""

    def factory(
        store: Optional[InMemoryStore] = None,
        hasher: Optional[PasswordHasher] = None,
        **overrides,
    ) -> FastAPI:
        return create_app(
            settings=make_settings(tmp_path, **overrides),
            store=store,
            hasher=hasher or BcryptPasswordHasher(rounds=4),
            rate_limit_clock=clock,
        )

    return factory


@pytest.fixture
def app(settings: Settings, store: InMemoryStore, clock: FakeClock) -> FastAPI:
    return create_app(
        settings=settings,
        store=store,
        hasher=BcryptPasswordHasher(rounds=4),
        rate_limit_clock=clock,
    )


@pytest.fixture
def state(app: FastAPI) -> AppState:
    return app.state.invoice_api


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin(state: AppState) -> User:
    return state.services.accounts.ensure_admin(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def user(state: AppState) -> User:
    return state.services.accounts.register(USER_EMAIL, "Regular User", USER_PASSWORD).user


@pytest.fixture
def admin_headers(state: AppState, admin: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {state.tokens.issue(admin.to_identity())}"}


@pytest.fixture
def user_headers(state: AppState, user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {state.tokens.issue(user.to_identity())}"}
