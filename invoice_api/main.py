"""
Application entry point.

Creates the FastAPI application and wires together:
- The dispatch pipeline (rate limit, authenticate, authorize, handler)
- Error handlers (centralized domain-to-HTTP mapping)
- Middleware (access log, CORS, security headers)
- Static files under /uploads
- Logging configuration

No business logic belongs here.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

from invoice_api.core.config import Settings, get_settings
from invoice_api.domain.invoicing.ports import PasswordHasher
from invoice_api.infrastructure.persistence.memory import InMemoryStore
from invoice_api.interfaces.dependencies import AppState, build_state
from invoice_api.shared.errors.handlers import register_error_handlers
from invoice_api.shared.logging import RequestLoggingMiddleware, configure_logging
from invoice_api.shared.security.headers import SecurityHeadersMiddleware

logger = logging.getLogger(__name__)

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
CORS_HEADERS = ["Origin", "Content-Length", "Content-Type", "Authorization"]
CORS_MAX_AGE = 12 * 60 * 60


def get_app_state(request: Request) -> AppState:
    return request.app.state.invoice_api


async def dispatch_request(request: Request) -> Response:
    """Single endpoint in front of the dispatch pipeline."""
    return await get_app_state(request).dispatcher.dispatch(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the uploads directory before serving."""
    uploads_dir = Path(app.state.invoice_api.settings.uploads_dir)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Serving uploads from %s", uploads_dir.resolve())
    yield


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryStore] = None,
    hasher: Optional[PasswordHasher] = None,
    rate_limit_clock: Callable[[], float] = time.monotonic,
    token_clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> FastAPI:
    """Create and configure the FastAPI application.

    Builds the application state, registers error handlers and
    middleware, and routes every path through the dispatcher.
    This is the composition root of the application.

    Args:
        settings: Configuration. Loaded from the environment when omitted.
        store: Repositories to serve from. A fresh in-memory store by default.
        hasher: Password hasher override, bcrypt by default.
        rate_limit_clock: Monotonic clock for the rate limiter.
        token_clock: Wall clock for issuing tokens.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    if not settings.debug and settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; using the insecure default secret in release mode")

    state = build_state(
        settings,
        store=store,
        hasher=hasher,
        rate_limit_clock=rate_limit_clock,
        token_clock=token_clock,
    )
    if settings.admin_email and settings.admin_password:
        state.services.accounts.ensure_admin(settings.admin_email, settings.admin_password)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        debug=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.invoice_api = state

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Middleware (last added runs first) ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=HTTP_METHODS,
        allow_headers=CORS_HEADERS,
        allow_credentials=True,
        max_age=CORS_MAX_AGE,
    )
    app.add_middleware(RequestLoggingMiddleware)

    # --- Static files ---
    # created on startup by lifespan()
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name="uploads",
    )

    # --- Everything else goes through the dispatcher ---
    app.add_route("/{path:path}", dispatch_request, methods=HTTP_METHODS, include_in_schema=False)

    logger.info(
        "%s %s ready (%s mode, %d routes)",
        settings.project_name,
        settings.version,
        settings.app_mode,
        len(state.dispatcher.routes),
    )
    return app


app = create_app()
