"""
Handlers for /api/export.

Responses are file attachments, not JSON.
"""

from starlette.responses import Response

from invoice_api.application.invoicing.dtos import ExportFile
from invoice_api.application.invoicing.exports import ExportService
from invoice_api.interfaces.handlers.base import actor_id
from invoice_api.shared.dispatch.context import RequestContext


def attachment(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


class ExportHandler:
    """CSV downloads of invoices and clients."""

    def __init__(self, exports: ExportService) -> None:
        self._exports = exports

    async def export_invoices(self, context: RequestContext) -> Response:
        return attachment(self._exports.export_invoices(actor_id(context)))

    async def export_clients(self, context: RequestContext) -> Response:
        return attachment(self._exports.export_clients(actor_id(context)))
