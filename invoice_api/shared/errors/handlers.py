"""
Centralized error handlers for FastAPI.

Maps access and invoicing domain errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging
import math
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from invoice_api.domain.access.errors import (
    AccessError,
    ExpiredCredentialError,
    InactiveAccountError,
    InsufficientRoleError,
    InvalidCredentialError,
    MissingCredentialError,
    RateLimitExceededError,
    RouteNotFoundError,
)
from invoice_api.domain.invoicing.errors import (
    AccountDisabledError,
    AuthenticationFailedError,
    DuplicateRecordError,
    InvalidOperationError,
    InvalidRequestError,
    InvoicingDomainError,
    RecordNotFoundError,
)
from invoice_api.interfaces.schemas import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_429 = 429
HTTP_500 = 500

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"


def error_response(
    status_code: int,
    error: str,
    detail: Any = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body = ErrorResponse(error=error, detail=detail or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def rate_limit_response(exc: RateLimitExceededError) -> JSONResponse:
    """Build the 429 response for an exhausted rate-limit bucket."""
    retry_after = max(1, math.ceil(exc.retry_after))
    return error_response(
        HTTP_429,
        "Rate limit exceeded",
        detail=f"{exc.limit} per {exc.window_seconds:g} seconds",
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(exc.limit),
            "X-RateLimit-Remaining": "0",
        },
    )


def access_error_response(exc: AccessError) -> JSONResponse:
    """Map an access refusal to its terminal response."""
    if isinstance(exc, RateLimitExceededError):
        logger.warning("Rate limit exceeded: key=%s", exc.key)
        return rate_limit_response(exc)
    if isinstance(exc, MissingCredentialError):
        return error_response(HTTP_401, "Authorization header required")
    if isinstance(exc, ExpiredCredentialError):
        return error_response(HTTP_401, "Token expired")
    if isinstance(exc, InvalidCredentialError):
        return error_response(HTTP_401, "Invalid token")
    if isinstance(exc, InactiveAccountError):
        logger.warning("Token presented for disabled account: %s", exc.user_id)
        return error_response(HTTP_401, "Account is disabled")
    if isinstance(exc, InsufficientRoleError):
        logger.warning("Insufficient role: role=%s capability=%s", exc.role, exc.capability)
        return error_response(HTTP_403, "Admin access required")
    if isinstance(exc, RouteNotFoundError):
        return error_response(HTTP_404, ROUTE_NOT_FOUND)
    logger.error("Unhandled access error: %s", exc.message)
    return error_response(HTTP_403, "Access denied")


def domain_error_response(exc: InvoicingDomainError) -> JSONResponse:
    """Map an invoicing domain error raised by a handler to a response."""
    if isinstance(exc, RecordNotFoundError):
        logger.info("Record not found: %s %s", exc.entity, exc.record_id)
        return error_response(HTTP_404, f"{exc.entity} not found")
    if isinstance(exc, DuplicateRecordError):
        return error_response(HTTP_409, exc.message)
    if isinstance(exc, InvalidRequestError):
        return error_response(HTTP_400, exc.reason, detail=exc.detail)
    if isinstance(exc, InvalidOperationError):
        return error_response(HTTP_400, exc.reason)
    if isinstance(exc, AuthenticationFailedError):
        return error_response(HTTP_401, exc.message)
    if isinstance(exc, AccountDisabledError):
        logger.warning("Login attempt on disabled account")
        return error_response(HTTP_403, exc.message)
    logger.error("Unhandled invoicing domain error: %s", exc.message)
    return error_response(HTTP_500, INTERNAL_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    These cover failures outside the dispatcher (static files,
    middleware). The dispatcher maps its own errors directly.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(AccessError)
    async def handle_access(_request: Request, exc: AccessError) -> JSONResponse:
        """Handle access refusals raised outside the stage loop."""
        return access_error_response(exc)

    @app.exception_handler(InvoicingDomainError)
    async def handle_invoicing_domain(
        _request: Request, exc: InvoicingDomainError
    ) -> JSONResponse:
        """Handle invoicing domain errors."""
        return domain_error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render framework HTTP errors (e.g. missing upload) as JSON."""
        if exc.status_code == HTTP_404:
            return error_response(HTTP_404, ROUTE_NOT_FOUND)
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return error_response(HTTP_500, INTERNAL_ERROR)
