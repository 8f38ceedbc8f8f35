"""
Use case: export invoices and clients as downloadable documents.

Rendering is delegated to the TabularExporter port (CSV by default).
Side effects: one audit entry per export.
"""

import logging
from datetime import datetime, timezone

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.dtos import ExportFile
from invoice_api.domain.invoicing.entities import Client, Invoice
from invoice_api.domain.invoicing.ports import Repository, TabularExporter

logger = logging.getLogger(__name__)

INVOICE_COLUMNS = (
    "id",
    "number",
    "client_id",
    "client_name",
    "status",
    "issue_date",
    "due_date",
    "total",
    "tracking_number",
    "carrier",
)

CLIENT_COLUMNS = (
    "id",
    "name",
    "email",
    "phone",
    "address",
    "tax_id",
    "created_at",
)


class ExportService:
    """Builds export files for invoices and clients."""

    def __init__(
        self,
        invoices: Repository[Invoice],
        clients: Repository[Client],
        exporter: TabularExporter,
        audit: AuditTrail,
    ) -> None:
        self._invoices = invoices
        self._clients = clients
        self._exporter = exporter
        self._audit = audit

    def export_invoices(self, actor_id: int) -> ExportFile:
        client_names = {client.id: client.name for client in self._clients.list_all()}
        invoices = self._invoices.list_all()
        rows = [
            (
                invoice.id,
                invoice.number,
                invoice.client_id,
                client_names.get(invoice.client_id, ""),
                invoice.status.value,
                invoice.issue_date.isoformat(),
                invoice.due_date.isoformat() if invoice.due_date else None,
                str(invoice.total),
                invoice.tracking_number,
                invoice.carrier,
            )
            for invoice in invoices
        ]
        return self._build(actor_id, "invoices", INVOICE_COLUMNS, rows)

    def export_clients(self, actor_id: int) -> ExportFile:
        rows = [
            (
                client.id,
                client.name,
                client.email,
                client.phone,
                client.address,
                client.tax_id,
                client.created_at.isoformat(),
            )
            for client in self._clients.list_all()
        ]
        return self._build(actor_id, "clients", CLIENT_COLUMNS, rows)

    def _build(self, actor_id: int, name: str, columns, rows) -> ExportFile:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        content = self._exporter.render(columns, rows)
        self._audit.record(actor_id, "export", name, details=f"{len(rows)} rows")
        logger.info("Exported %d %s", len(rows), name)
        return ExportFile(
            filename=f"{name}_{stamp}.{self._exporter.extension}",
            media_type=self._exporter.media_type,
            content=content,
            row_count=len(rows),
        )
