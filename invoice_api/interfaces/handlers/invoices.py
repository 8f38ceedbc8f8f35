"""
Handlers for /api/invoices.
"""

from starlette.responses import Response

from invoice_api.application.invoicing.dtos import (
    CreateInvoiceCommand,
    InvoiceLineCommand,
)
from invoice_api.application.invoicing.invoices import InvoiceService
from invoice_api.domain.invoicing.entities import InvoiceStatus
from invoice_api.interfaces.handlers.base import (
    actor_id,
    json_response,
    list_response,
    message_response,
    path_id,
    query_enum,
    query_int,
    read_body,
)
from invoice_api.interfaces.schemas import (
    InvoiceRequest,
    InvoiceResponse,
    InvoiceStatusRequest,
    InvoiceTrackingRequest,
)
from invoice_api.shared.dispatch.context import RequestContext


class InvoiceHandler:
    """Invoice endpoints backed by InvoiceService."""

    def __init__(self, invoices: InvoiceService) -> None:
        self._invoices = invoices

    async def get_invoices(self, context: RequestContext) -> Response:
        invoices = self._invoices.search(
            status=query_enum(context, "status", InvoiceStatus),
            client_id=query_int(context, "client_id"),
        )
        return list_response(InvoiceResponse, invoices)

    async def get_invoice(self, context: RequestContext) -> Response:
        return json_response(InvoiceResponse.model_validate(self._invoices.get(path_id(context))))

    async def create_invoice(self, context: RequestContext) -> Response:
        body = await read_body(context, InvoiceRequest)
        command = CreateInvoiceCommand(
            client_id=body.client_id,
            items=tuple(
                InvoiceLineCommand(
                    quantity=item.quantity,
                    description=item.description,
                    unit_price=item.unit_price,
                    product_id=item.product_id,
                )
                for item in body.items
            ),
            issue_date=body.issue_date,
            due_date=body.due_date,
            notes=body.notes,
        )
        invoice = self._invoices.create(actor_id(context), command)
        return json_response(InvoiceResponse.model_validate(invoice), 201)

    async def update_invoice_status(self, context: RequestContext) -> Response:
        body = await read_body(context, InvoiceStatusRequest)
        invoice = self._invoices.update_status(actor_id(context), path_id(context), body.status)
        return json_response(InvoiceResponse.model_validate(invoice))

    async def update_invoice_tracking(self, context: RequestContext) -> Response:
        body = await read_body(context, InvoiceTrackingRequest)
        invoice = self._invoices.update_tracking(
            actor_id(context), path_id(context), body.tracking_number, body.carrier
        )
        return json_response(InvoiceResponse.model_validate(invoice))

    async def delete_invoice(self, context: RequestContext) -> Response:
        self._invoices.delete(actor_id(context), path_id(context))
        return message_response("Invoice deleted successfully")
