"""
Handler for /api/logs (audit trail listing).
"""

from starlette.responses import Response

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.interfaces.handlers.base import list_response, query_int
from invoice_api.interfaces.schemas import AuditLogResponse
from invoice_api.shared.dispatch.context import RequestContext

DEFAULT_LIMIT = 100


class LogHandler:
    def __init__(self, audit: AuditTrail) -> None:
        self._audit = audit

    async def get_logs(self, context: RequestContext) -> Response:
        """List audit entries, newest first.

        Query parameters: entity_type, user_id, limit (default 100).
        """
        entries = self._audit.search(
            entity_type=context.request.query_params.get("entity_type") or None,
            user_id=query_int(context, "user_id"),
            limit=query_int(context, "limit", DEFAULT_LIMIT),
        )
        return list_response(AuditLogResponse, entries)
