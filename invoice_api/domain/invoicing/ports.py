"""
Port interfaces (ABCs) for the invoicing bounded context.

Ports define the contracts that the application layer requires from
the outside world. Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from invoice_api.domain.invoicing.entities import AuditLogEntry, User

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Generic persistence port keyed by integer id."""

    @abstractmethod
    def get(self, record_id: int) -> Optional[T]:
        """Return the record with the given id, or None."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return all records ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def add(self, record: T) -> T:
        """Store a new record and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, record: T) -> T:
        """Replace a stored record. The record's id must already exist."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """Remove a record. Returns False if it did not exist."""
        raise NotImplementedError


class UserRepository(Repository[User]):
    """Port for user account persistence."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return the user with the given email (case-insensitive), or None."""
        raise NotImplementedError

    @abstractmethod
    def add_if_email_free(self, user: User) -> Optional[User]:
        """Store `user` unless its email is taken. Returns None when it is.

        The lookup and the insert happen atomically.
        """
        raise NotImplementedError


class AuditLogRepository(ABC):
    """Port for the append-only audit log."""

    @abstractmethod
    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Store an entry and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def search(
        self,
        entity_type: Optional[str] = None,
        user_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        """Return matching entries, newest first."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        raise NotImplementedError


class TabularExporter(ABC):
    """Port for rendering rows into a downloadable document."""

    media_type: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def render(self, columns: Sequence[str], rows: Iterable[Sequence[object]]) -> bytes:
        """Render a header row and data rows into bytes."""
        raise NotImplementedError
