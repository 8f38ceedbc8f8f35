"""
Handlers for /api/products and /api/product-groups.
"""

from starlette.responses import Response

from invoice_api.application.invoicing.catalog import ProductGroupService, ProductService
from invoice_api.interfaces.handlers.base import (
    actor_id,
    json_response,
    list_response,
    message_response,
    path_id,
    read_body,
)
from invoice_api.interfaces.schemas import (
    GroupMembershipRequest,
    ProductGroupRequest,
    ProductGroupResponse,
    ProductGroupUpdateRequest,
    ProductRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from invoice_api.shared.dispatch.context import RequestContext


class ProductHandler:
    """Product and product group endpoints."""

    def __init__(self, products: ProductService, groups: ProductGroupService) -> None:
        self._products = products
        self._groups = groups

    # -- products -------------------------------------------------------

    async def get_products(self, context: RequestContext) -> Response:
        return list_response(ProductResponse, self._products.list_all())

    async def get_product(self, context: RequestContext) -> Response:
        return json_response(ProductResponse.model_validate(self._products.get(path_id(context))))

    async def create_product(self, context: RequestContext) -> Response:
        body = await read_body(context, ProductRequest)
        product = self._products.create(actor_id(context), body.model_dump())
        return json_response(ProductResponse.model_validate(product), 201)

    async def update_product(self, context: RequestContext) -> Response:
        body = await read_body(context, ProductUpdateRequest)
        product = self._products.update(
            actor_id(context),
            path_id(context),
            body.model_dump(exclude_unset=True, exclude_none=True),
        )
        return json_response(ProductResponse.model_validate(product))

    async def delete_product(self, context: RequestContext) -> Response:
        self._products.delete(actor_id(context), path_id(context))
        return message_response("Product deleted successfully")

    # -- product groups -------------------------------------------------

    async def get_product_groups(self, context: RequestContext) -> Response:
        return list_response(ProductGroupResponse, self._groups.list_all())

    async def get_product_group(self, context: RequestContext) -> Response:
        group = self._groups.get(path_id(context))
        payload = ProductGroupResponse.model_validate(group).model_dump(mode="json")
        payload["products"] = [
            ProductResponse.model_validate(p).model_dump(mode="json")
            for p in self._groups.products_in(group.id)
        ]
        return json_response(payload)

    async def create_product_group(self, context: RequestContext) -> Response:
        body = await read_body(context, ProductGroupRequest)
        group = self._groups.create(actor_id(context), body.model_dump())
        return json_response(ProductGroupResponse.model_validate(group), 201)

    async def update_product_group(self, context: RequestContext) -> Response:
        body = await read_body(context, ProductGroupUpdateRequest)
        group = self._groups.update(
            actor_id(context),
            path_id(context),
            body.model_dump(exclude_unset=True, exclude_none=True),
        )
        return json_response(ProductGroupResponse.model_validate(group))

    async def delete_product_group(self, context: RequestContext) -> Response:
        self._groups.delete(actor_id(context), path_id(context))
        return message_response("Product group deleted successfully")

    async def add_product_to_group(self, context: RequestContext) -> Response:
        body = await read_body(context, GroupMembershipRequest)
        group = self._groups.add_product(actor_id(context), path_id(context), body.product_id)
        return json_response(ProductGroupResponse.model_validate(group))

    async def remove_product_from_group(self, context: RequestContext) -> Response:
        group = self._groups.remove_product(
            actor_id(context), path_id(context), path_id(context, "productId")
        )
        return json_response(ProductGroupResponse.model_validate(group))
