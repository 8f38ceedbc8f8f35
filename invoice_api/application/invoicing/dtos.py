"""
Data Transfer Objects for the invoicing application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from invoice_api.domain.invoicing.entities import User


@dataclass(frozen=True)
class AuthResult:
    """Output DTO for register and login.

    Attributes:
        user: The authenticated account.
        token: Signed bearer token for subsequent requests.
    """

    user: User
    token: str


@dataclass(frozen=True)
class InvoiceLineCommand:
    """Input DTO for one invoice line.

    Attributes:
        description: Line text. Defaults to the product name when omitted.
        quantity: Number of units.
        unit_price: Price per unit. Defaults to the product price when omitted.
        product_id: Optional catalog product this line refers to.
    """

    quantity: Decimal
    description: Optional[str] = None
    unit_price: Optional[Decimal] = None
    product_id: Optional[int] = None


@dataclass(frozen=True)
class CreateInvoiceCommand:
    """Input DTO for creating an invoice.

    Attributes:
        client_id: Client being invoiced.
        items: At least one invoice line.
        issue_date: Defaults to today.
        due_date: Optional payment due date.
        notes: Free text printed on the invoice.
    """

    client_id: int
    items: tuple[InvoiceLineCommand, ...]
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ExportFile:
    """Output DTO for a rendered export.

    Attributes:
        filename: Suggested download name.
        media_type: MIME type of the content.
        content: Rendered bytes.
        row_count: Number of data rows exported.
    """

    filename: str
    media_type: str
    content: bytes
    row_count: int
