"""
Logging configuration for the application.

Sets up structured logging with a consistent format and provides
the access-log middleware. Logging must not change program behavior.
Never logs sensitive data (request bodies, passwords, tokens).
"""

import logging
import sys
import time
from datetime import datetime, timezone
from email.utils import format_datetime

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ACCESS_LOGGER_NAME = "invoice_api.access"

access_logger = logging.getLogger(ACCESS_LOGGER_NAME)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # The access middleware replaces uvicorn's own access lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)


def format_access_line(
    client_ip: str,
    method: str,
    path: str,
    protocol: str,
    status_code: int,
    latency_ms: float,
    user_agent: str,
    when: datetime,
) -> str:
    """Render one access-log line in a combined-log style."""
    return '%s - [%s] "%s %s %s %d %.3fms "%s""' % (
        client_ip,
        format_datetime(when, usegmt=True),
        method,
        path,
        protocol,
        status_code,
        latency_ms,
        user_agent,
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that writes one access-log line per request.

    Records client IP, method, path, protocol, status and latency.
    Headers other than User-Agent are never logged.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Time the request and log the outcome."""
        started = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            format_access_line(
                client_ip=request.client.host if request.client else "-",
                method=request.method,
                path=request.url.path,
                protocol=f"HTTP/{request.scope.get('http_version', '1.1')}",
                status_code=response.status_code,
                latency_ms=latency_ms,
                user_agent=request.headers.get("user-agent", "-"),
                when=datetime.now(timezone.utc),
            )
        )
        return response
