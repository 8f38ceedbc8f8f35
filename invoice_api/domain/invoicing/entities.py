"""
Domain entities for the invoicing bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
An id of 0 means the record has not been stored yet.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from invoice_api.domain.access.entities import Identity, Role

CENT = Decimal("0.01")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvoiceStatus(Enum):
    """Lifecycle state of an invoice."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class DeliveryStatus(Enum):
    """Lifecycle state of a delivery."""

    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class User:
    """A user account able to sign in to the API."""

    email: str
    name: str
    password_hash: str
    role: Role = Role.USER
    permissions: tuple[str, ...] = ()
    is_active: bool = True
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_identity(self) -> Identity:
        return Identity(user_id=self.id, role=self.role, is_active=self.is_active)


@dataclass(frozen=True)
class Client:
    """A customer that receives invoices and deliveries."""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    tax_id: Optional[str] = None
    notes: Optional[str] = None
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Product:
    """A sellable product with a unit price."""

    name: str
    unit_price: Decimal
    sku: Optional[str] = None
    description: Optional[str] = None
    unit: str = "pcs"
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ProductGroup:
    """A named collection of products."""

    name: str
    description: Optional[str] = None
    product_ids: tuple[int, ...] = ()
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class InvoiceItem:
    """A single invoice line."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    product_id: Optional[int] = None

    @property
    def total(self) -> Decimal:
        return (self.quantity * self.unit_price).quantize(CENT)


@dataclass(frozen=True)
class Invoice:
    """An invoice issued to a client."""

    number: str
    client_id: int
    items: tuple[InvoiceItem, ...]
    status: InvoiceStatus = InvoiceStatus.DRAFT
    issue_date: date = field(default_factory=lambda: utcnow().date())
    due_date: Optional[date] = None
    notes: Optional[str] = None
    tracking_number: Optional[str] = None
    carrier: Optional[str] = None
    created_by: Optional[int] = None
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def total(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal("0.00"))


@dataclass(frozen=True)
class Delivery:
    """A shipment to a client, optionally tied to an invoice."""

    client_id: int
    address: str
    invoice_id: Optional[int] = None
    scheduled_date: Optional[date] = None
    delivered_at: Optional[datetime] = None
    status: DeliveryStatus = DeliveryStatus.PENDING
    notes: Optional[str] = None
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class AuditLogEntry:
    """A record of one mutation performed through the API."""

    action: str
    entity_type: str
    entity_id: Optional[int] = None
    user_id: Optional[int] = None
    details: str = ""
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ClientStatistics:
    """Aggregated invoicing figures for a single client."""

    client_id: int
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    outstanding: Decimal
    delivery_count: int
