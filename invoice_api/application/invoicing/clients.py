"""
Use cases: clients.

Client records plus the per-client views of invoices, deliveries
and invoicing statistics.
"""

from decimal import Decimal

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.records import RecordService
from invoice_api.domain.invoicing.entities import (
    Client,
    ClientStatistics,
    Delivery,
    Invoice,
    InvoiceStatus,
)
from invoice_api.domain.invoicing.ports import Repository

ZERO = Decimal("0.00")


class ClientService(RecordService[Client]):
    """Client records and their related invoices and deliveries."""

    record_type = Client
    entity_label = "Client"
    entity_type = "client"

    def __init__(
        self,
        clients: Repository[Client],
        invoices: Repository[Invoice],
        deliveries: Repository[Delivery],
        audit: AuditTrail,
    ) -> None:
        super().__init__(clients, audit)
        self._invoices = invoices
        self._deliveries = deliveries

    def search(self, query: str = "") -> list[Client]:
        """Return clients whose name or email contains `query` (case-insensitive)."""
        clients = self.list_all()
        needle = query.strip().lower()
        if not needle:
            return clients
        return [
            client
            for client in clients
            if needle in client.name.lower() or needle in (client.email or "").lower()
        ]

    def invoices_for(self, client_id: int) -> list[Invoice]:
        self.get(client_id)
        return [i for i in self._invoices.list_all() if i.client_id == client_id]

    def deliveries_for(self, client_id: int) -> list[Delivery]:
        self.get(client_id)
        return [d for d in self._deliveries.list_all() if d.client_id == client_id]

    def statistics(self, client_id: int) -> ClientStatistics:
        """Aggregate invoice totals for a client. Cancelled invoices are ignored."""
        invoices = [
            invoice
            for invoice in self.invoices_for(client_id)
            if invoice.status is not InvoiceStatus.CANCELLED
        ]
        total_invoiced = sum((i.total for i in invoices), ZERO)
        total_paid = sum((i.total for i in invoices if i.status is InvoiceStatus.PAID), ZERO)
        return ClientStatistics(
            client_id=client_id,
            invoice_count=len(invoices),
            total_invoiced=total_invoiced,
            total_paid=total_paid,
            outstanding=total_invoiced - total_paid,
            delivery_count=len(self.deliveries_for(client_id)),
        )
