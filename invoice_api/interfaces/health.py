"""
Health check handler.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns status, server time, run mode and version.
"""

from datetime import datetime, timezone

from starlette.responses import Response

from invoice_api.core.config import Settings
from invoice_api.interfaces.handlers.base import json_response
from invoice_api.interfaces.schemas import HealthResponse
from invoice_api.shared.dispatch.context import RequestContext


class HealthHandler:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def health_check(self, context: RequestContext) -> Response:
        """Return current application health status."""
        return json_response(
            HealthResponse(
                status="OK",
                timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
                environment=self._settings.app_mode,
                version=self._settings.version,
            )
        )
