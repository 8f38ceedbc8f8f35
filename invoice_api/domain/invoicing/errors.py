"""
Domain-specific errors for the invoicing bounded context.

All errors raised from the application and domain layers for
business records must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class InvoicingDomainError(Exception):
    """Base error for all invoicing domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RecordNotFoundError(InvoicingDomainError):
    """Raised when a record with the requested id does not exist."""

    def __init__(self, entity: str, record_id: int) -> None:
        super().__init__(f"{entity} not found: {record_id}")
        self.entity = entity
        self.record_id = record_id


class DuplicateRecordError(InvoicingDomainError):
    """Raised when a record would violate a uniqueness rule."""

    def __init__(self, entity: str, field_name: str, value: str) -> None:
        super().__init__(f"{entity} with {field_name} already exists")
        self.entity = entity
        self.field_name = field_name
        self.value = value


class InvalidRequestError(InvoicingDomainError):
    """Raised when a request body or path parameter cannot be parsed."""

    def __init__(self, reason: str, detail: object = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail = detail


class InvalidOperationError(InvoicingDomainError):
    """Raised when an operation is not allowed in the current state."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AuthenticationFailedError(InvoicingDomainError):
    """Raised when login credentials do not match an account."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class AccountDisabledError(InvoicingDomainError):
    """Raised when a deactivated account tries to log in."""

    def __init__(self, email: str) -> None:
        super().__init__("Account is disabled")
        self.email = email
