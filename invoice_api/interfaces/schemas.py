"""
Pydantic schemas for API request/response validation.

These schemas enforce input shape and define the API contract.
Business-entity rules beyond shape are not enforced here.
No business logic belongs here.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from invoice_api.domain.access.entities import Role
from invoice_api.domain.invoicing.entities import DeliveryStatus, InvoiceStatus

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PASSWORD_MIN_LEN = 6
# bcrypt ignores bytes past 72
PASSWORD_MAX_LEN = 72
NAME_MAX_LEN = 255


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: Any = None


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    timestamp: str
    environment: str
    version: str


class ListResponse(BaseModel, Generic[T]):
    """Envelope for collection responses."""

    items: list[T]
    total: int


class RecordResponse(BaseModel):
    """Base for responses built from domain entities."""

    model_config = ConfigDict(from_attributes=True)


# -- accounts ------------------------------------------------------------


class RegisterRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=NAME_MAX_LEN)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class UpdateProfileRequest(BaseModel):
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN, max_length=NAME_MAX_LEN)
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class CreateUserRequest(RegisterRequest):
    role: Role = Role.USER
    permissions: list[str] = Field(default_factory=list)


class UpdatePermissionsRequest(BaseModel):
    role: Optional[Role] = None
    permissions: Optional[list[str]] = None


class UserResponse(RecordResponse):
    id: int
    email: str
    name: str
    role: Role
    permissions: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


# -- clients -------------------------------------------------------------


class ClientRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: Optional[str] = Field(default=None, max_length=NAME_MAX_LEN)
    phone: Optional[str] = Field(default=None, max_length=64)
    address: Optional[str] = None
    tax_id: Optional[str] = Field(default=None, max_length=64)
    notes: Optional[str] = None


class ClientUpdateRequest(ClientRequest):
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)


class ClientResponse(RecordResponse):
    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    tax_id: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


class ClientStatisticsResponse(RecordResponse):
    client_id: int
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    outstanding: Decimal
    delivery_count: int


# -- products ------------------------------------------------------------


class ProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    sku: Optional[str] = Field(default=None, max_length=64)
    description: Optional[str] = None
    unit: str = Field(default="pcs", min_length=1, max_length=16)


class ProductUpdateRequest(ProductRequest):
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    unit_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=16)


class ProductResponse(RecordResponse):
    id: int
    name: str
    unit_price: Decimal
    sku: Optional[str]
    description: Optional[str]
    unit: str
    created_at: datetime
    updated_at: datetime


class ProductGroupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    description: Optional[str] = None


class ProductGroupUpdateRequest(ProductGroupRequest):
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)


class GroupMembershipRequest(BaseModel):
    product_id: int = Field(..., gt=0)


class ProductGroupResponse(RecordResponse):
    id: int
    name: str
    description: Optional[str]
    product_ids: list[int]
    created_at: datetime
    updated_at: datetime


# -- invoices ------------------------------------------------------------


class InvoiceItemRequest(BaseModel):
    quantity: Decimal = Field(..., gt=0)
    description: Optional[str] = Field(default=None, max_length=NAME_MAX_LEN)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    product_id: Optional[int] = Field(default=None, gt=0)


class InvoiceRequest(BaseModel):
    client_id: int = Field(..., gt=0)
    items: list[InvoiceItemRequest] = Field(..., min_length=1)
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


class InvoiceStatusRequest(BaseModel):
    status: InvoiceStatus


class InvoiceTrackingRequest(BaseModel):
    tracking_number: Optional[str] = Field(default=None, max_length=128)
    carrier: Optional[str] = Field(default=None, max_length=128)


class InvoiceItemResponse(RecordResponse):
    description: str
    quantity: Decimal
    unit_price: Decimal
    product_id: Optional[int]
    total: Decimal


class InvoiceResponse(RecordResponse):
    id: int
    number: str
    client_id: int
    items: list[InvoiceItemResponse]
    status: InvoiceStatus
    issue_date: date
    due_date: Optional[date]
    notes: Optional[str]
    tracking_number: Optional[str]
    carrier: Optional[str]
    created_by: Optional[int]
    total: Decimal
    created_at: datetime
    updated_at: datetime


# -- deliveries ----------------------------------------------------------


class DeliveryRequest(BaseModel):
    client_id: int = Field(..., gt=0)
    address: str = Field(..., min_length=1)
    invoice_id: Optional[int] = Field(default=None, gt=0)
    scheduled_date: Optional[date] = None
    status: DeliveryStatus = DeliveryStatus.PENDING
    notes: Optional[str] = None


class DeliveryUpdateRequest(DeliveryRequest):
    client_id: Optional[int] = Field(default=None, gt=0)
    address: Optional[str] = Field(default=None, min_length=1)
    status: Optional[DeliveryStatus] = None


class DeliveryResponse(RecordResponse):
    id: int
    client_id: int
    address: str
    invoice_id: Optional[int]
    scheduled_date: Optional[date]
    delivered_at: Optional[datetime]
    status: DeliveryStatus
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


# -- audit logs ----------------------------------------------------------


class AuditLogResponse(RecordResponse):
    id: int
    action: str
    entity_type: str
    entity_id: Optional[int]
    user_id: Optional[int]
    details: str
    created_at: datetime
