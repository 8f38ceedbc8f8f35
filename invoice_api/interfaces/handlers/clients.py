"""
Handlers for /api/clients.
"""

from starlette.responses import Response

from invoice_api.application.invoicing.clients import ClientService
from invoice_api.interfaces.handlers.base import (
    actor_id,
    json_response,
    list_response,
    message_response,
    path_id,
    read_body,
)
from invoice_api.interfaces.schemas import (
    ClientRequest,
    ClientResponse,
    ClientStatisticsResponse,
    ClientUpdateRequest,
    DeliveryResponse,
    InvoiceResponse,
)
from invoice_api.shared.dispatch.context import RequestContext


class ClientHandler:
    """Client endpoints backed by ClientService."""

    def __init__(self, clients: ClientService) -> None:
        self._clients = clients

    async def get_clients(self, context: RequestContext) -> Response:
        query = context.request.query_params.get("search", "")
        return list_response(ClientResponse, self._clients.search(query))

    async def get_client(self, context: RequestContext) -> Response:
        return json_response(ClientResponse.model_validate(self._clients.get(path_id(context))))

    async def create_client(self, context: RequestContext) -> Response:
        body = await read_body(context, ClientRequest)
        client = self._clients.create(actor_id(context), body.model_dump())
        return json_response(ClientResponse.model_validate(client), 201)

    async def update_client(self, context: RequestContext) -> Response:
        body = await read_body(context, ClientUpdateRequest)
        client = self._clients.update(
            actor_id(context),
            path_id(context),
            body.model_dump(exclude_unset=True, exclude_none=True),
        )
        return json_response(ClientResponse.model_validate(client))

    async def delete_client(self, context: RequestContext) -> Response:
        self._clients.delete(actor_id(context), path_id(context))
        return message_response("Client deleted successfully")

    async def get_client_invoices(self, context: RequestContext) -> Response:
        return list_response(InvoiceResponse, self._clients.invoices_for(path_id(context)))

    async def get_client_deliveries(self, context: RequestContext) -> Response:
        return list_response(DeliveryResponse, self._clients.deliveries_for(path_id(context)))

    async def get_client_statistics(self, context: RequestContext) -> Response:
        stats = self._clients.statistics(path_id(context))
        return json_response(ClientStatisticsResponse.model_validate(stats))
