"""
Handlers for /api/deliveries.
"""

from starlette.responses import Response

from invoice_api.application.invoicing.deliveries import DeliveryService
from invoice_api.domain.invoicing.entities import DeliveryStatus
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
    DeliveryRequest,
    DeliveryResponse,
    DeliveryUpdateRequest,
)
from invoice_api.shared.dispatch.context import RequestContext


class DeliveryHandler:
    def __init__(self, deliveries: DeliveryService) -> None:
        self._deliveries = deliveries

    async def get_deliveries(self, context: RequestContext) -> Response:
        deliveries = self._deliveries.search(
            status=query_enum(context, "status", DeliveryStatus),
            client_id=query_int(context, "client_id"),
        )
        return list_response(DeliveryResponse, deliveries)

    async def get_delivery(self, context: RequestContext) -> Response:
        delivery = self._deliveries.get(path_id(context))
        return json_response(DeliveryResponse.model_validate(delivery))

    async def create_delivery(self, context: RequestContext) -> Response:
        body = await read_body(context, DeliveryRequest)
        delivery = self._deliveries.create(actor_id(context), body.model_dump())
        return json_response(DeliveryResponse.model_validate(delivery), 201)

    async def update_delivery(self, context: RequestContext) -> Response:
        body = await read_body(context, DeliveryUpdateRequest)
        delivery = self._deliveries.update(
            actor_id(context),
            path_id(context),
            body.model_dump(exclude_unset=True, exclude_none=True),
        )
        return json_response(DeliveryResponse.model_validate(delivery))

    async def delete_delivery(self, context: RequestContext) -> Response:
        self._deliveries.delete(actor_id(context), path_id(context))
        return message_response("Delivery deleted successfully")
