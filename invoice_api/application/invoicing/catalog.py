"""
Use cases: products and product groups.
"""

from dataclasses import replace
from typing import Optional

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.records import RecordService
from invoice_api.domain.invoicing.entities import Product, ProductGroup, utcnow
from invoice_api.domain.invoicing.errors import InvalidOperationError
from invoice_api.domain.invoicing.ports import Repository


class ProductService(RecordService[Product]):
    """Product records. Deleting a product drops it from every group."""

    record_type = Product
    entity_label = "Product"
    entity_type = "product"

    def __init__(
        self,
        products: Repository[Product],
        groups: Repository[ProductGroup],
        audit: AuditTrail,
    ) -> None:
        super().__init__(products, audit)
        self._groups = groups

    def delete(self, actor_id: Optional[int], record_id: int) -> None:
        super().delete(actor_id, record_id)
        for group in self._groups.list_all():
            if record_id in group.product_ids:
                self._groups.update(
                    replace(
                        group,
                        product_ids=tuple(p for p in group.product_ids if p != record_id),
                        updated_at=utcnow(),
                    )
                )


class ProductGroupService(RecordService[ProductGroup]):
    """Product groups and their membership."""

    record_type = ProductGroup
    entity_label = "Product group"
    entity_type = "product_group"

    def __init__(
        self,
        groups: Repository[ProductGroup],
        products: ProductService,
        audit: AuditTrail,
    ) -> None:
        super().__init__(groups, audit)
        self._products = products

    def products_in(self, group_id: int) -> list[Product]:
        group = self.get(group_id)
        return [self._products.get(product_id) for product_id in group.product_ids]

    def add_product(self, actor_id: int, group_id: int, product_id: int) -> ProductGroup:
        """Add a product to a group. Adding an existing member is a no-op."""
        group = self.get(group_id)
        self._products.get(product_id)
        if product_id in group.product_ids:
            return group
        updated = self._repository.update(
            replace(group, product_ids=group.product_ids + (product_id,), updated_at=utcnow())
        )
        self._audit.record(actor_id, "add_product", self.entity_type, group_id, f"product={product_id}")
        return updated

    def remove_product(self, actor_id: int, group_id: int, product_id: int) -> ProductGroup:
        group = self.get(group_id)
        if product_id not in group.product_ids:
            raise InvalidOperationError("Product is not in this group")
        updated = self._repository.update(
            replace(
                group,
                product_ids=tuple(p for p in group.product_ids if p != product_id),
                updated_at=utcnow(),
            )
        )
        self._audit.record(actor_id, "remove_product", self.entity_type, group_id, f"product={product_id}")
        return updated
