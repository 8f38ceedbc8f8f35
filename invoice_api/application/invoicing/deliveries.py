"""
Use cases: deliveries.

Deliveries must reference an existing client and, optionally, an
existing invoice. Marking a delivery as delivered stamps delivered_at.
"""

from typing import Any, Mapping, Optional

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.records import RecordService
from invoice_api.domain.invoicing.entities import (
    Client,
    Delivery,
    DeliveryStatus,
    Invoice,
    utcnow,
)
from invoice_api.domain.invoicing.errors import RecordNotFoundError
from invoice_api.domain.invoicing.ports import Repository


class DeliveryService(RecordService[Delivery]):
    """Delivery records filtered by status and client."""

    record_type = Delivery
    entity_label = "Delivery"
    entity_type = "delivery"

    def __init__(
        self,
        deliveries: Repository[Delivery],
        clients: Repository[Client],
        invoices: Repository[Invoice],
        audit: AuditTrail,
    ) -> None:
        super().__init__(deliveries, audit)
        self._clients = clients
        self._invoices = invoices

    def search(
        self,
        status: Optional[DeliveryStatus] = None,
        client_id: Optional[int] = None,
    ) -> list[Delivery]:
        return [
            delivery
            for delivery in self.list_all()
            if (status is None or delivery.status is status)
            and (client_id is None or delivery.client_id == client_id)
        ]

    def update(self, actor_id: Optional[int], record_id: int, changes: Mapping[str, Any]) -> Delivery:
        changes = dict(changes)
        if changes.get("status") is DeliveryStatus.DELIVERED and "delivered_at" not in changes:
            if self.get(record_id).delivered_at is None:
                changes["delivered_at"] = utcnow()
        return super().update(actor_id, record_id, changes)

    def _validate(self, fields: Mapping[str, Any]) -> None:
        client_id = fields.get("client_id")
        if client_id is not None and self._clients.get(client_id) is None:
            raise RecordNotFoundError("Client", client_id)
        invoice_id = fields.get("invoice_id")
        if invoice_id is not None and self._invoices.get(invoice_id) is None:
            raise RecordNotFoundError("Invoice", invoice_id)

    def _describe(self, record: Delivery) -> str:
        return f"client={record.client_id} status={record.status.value}"
