"""
Use cases: invoices.

Input: CreateInvoiceCommand, status and tracking updates.
Output: Invoice entities with computed totals.
Side effects: writes to the invoice repository and the audit trail.
Failure cases: RecordNotFoundError (client, product or invoice).
"""

import itertools
import logging
import threading
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.dtos import CreateInvoiceCommand
from invoice_api.domain.invoicing.entities import (
    Client,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Product,
    utcnow,
)
from invoice_api.domain.invoicing.errors import RecordNotFoundError
from invoice_api.domain.invoicing.ports import Repository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "invoice"
NUMBER_FORMAT = "INV-{:06d}"


class InvoiceService:
    """Creates invoices and manages their status and shipment tracking."""

    def __init__(
        self,
        invoices: Repository[Invoice],
        clients: Repository[Client],
        products: Repository[Product],
        audit: AuditTrail,
    ) -> None:
        self._invoices = invoices
        self._clients = clients
        self._products = products
        self._audit = audit
        self._numbers = itertools.count(len(invoices.list_all()) + 1)
        self._number_lock = threading.Lock()

    def search(
        self,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
    ) -> list[Invoice]:
        return [
            invoice
            for invoice in self._invoices.list_all()
            if (status is None or invoice.status is status)
            and (client_id is None or invoice.client_id == client_id)
        ]

    def get(self, invoice_id: int) -> Invoice:
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise RecordNotFoundError("Invoice", invoice_id)
        return invoice

    def create(self, actor_id: int, command: CreateInvoiceCommand) -> Invoice:
        """Create an invoice for an existing client.

        Lines referencing a product take its name and price unless the
        command overrides them.
        """
        if self._clients.get(command.client_id) is None:
            raise RecordNotFoundError("Client", command.client_id)

        items = []
        for line in command.items:
            description = line.description
            unit_price = line.unit_price
            if line.product_id is not None:
                product = self._products.get(line.product_id)
                if product is None:
                    raise RecordNotFoundError("Product", line.product_id)
                description = description or product.name
                unit_price = unit_price if unit_price is not None else product.unit_price
            items.append(
                InvoiceItem(
                    description=description or "",
                    quantity=line.quantity,
                    unit_price=unit_price if unit_price is not None else Decimal("0"),
                    product_id=line.product_id,
                )
            )

        fields = {}
        if command.issue_date is not None:
            fields["issue_date"] = command.issue_date
        invoice = self._invoices.add(
            Invoice(
                number=self._next_number(),
                client_id=command.client_id,
                items=tuple(items),
                due_date=command.due_date,
                notes=command.notes,
                created_by=actor_id,
                **fields,
            )
        )
        self._audit.record(actor_id, "create", ENTITY_TYPE, invoice.id, f"{invoice.number} total={invoice.total}")
        return invoice

    def update_status(self, actor_id: int, invoice_id: int, status: InvoiceStatus) -> Invoice:
        invoice = self.get(invoice_id)
        updated = self._invoices.update(replace(invoice, status=status, updated_at=utcnow()))
        self._audit.record(
            actor_id,
            "update_status",
            ENTITY_TYPE,
            invoice_id,
            f"{invoice.status.value} -> {status.value}",
        )
        return updated

    def update_tracking(
        self,
        actor_id: int,
        invoice_id: int,
        tracking_number: Optional[str],
        carrier: Optional[str] = None,
    ) -> Invoice:
        invoice = self.get(invoice_id)
        updated = self._invoices.update(
            replace(
                invoice,
                tracking_number=tracking_number,
                carrier=carrier if carrier is not None else invoice.carrier,
                updated_at=utcnow(),
            )
        )
        self._audit.record(actor_id, "update_tracking", ENTITY_TYPE, invoice_id, tracking_number or "")
        return updated

    def delete(self, actor_id: int, invoice_id: int) -> None:
        invoice = self.get(invoice_id)
        self._invoices.delete(invoice_id)
        self._audit.record(actor_id, "delete", ENTITY_TYPE, invoice_id, invoice.number)

    def _next_number(self) -> str:
        with self._number_lock:
            return NUMBER_FORMAT.format(next(self._numbers))
