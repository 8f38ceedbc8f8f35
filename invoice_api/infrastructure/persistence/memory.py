"""
Adapter: In-memory persistence.

Implements the Repository, UserRepository and AuditLogRepository ports
with plain dictionaries. Each repository owns its own lock so that
concurrent requests never lose writes. Data lives for the lifetime
of the process.
"""

import threading
from dataclasses import dataclass, field, replace
from typing import Optional, TypeVar

from invoice_api.domain.invoicing.entities import (
    AuditLogEntry,
    Client,
    Delivery,
    Invoice,
    Product,
    ProductGroup,
    User,
)
from invoice_api.domain.invoicing.ports import (
    AuditLogRepository,
    Repository,
    UserRepository,
)

T = TypeVar("T")


class InMemoryRepository(Repository[T]):
    """Dictionary-backed repository with auto-incrementing ids."""

    def __init__(self) -> None:
        self._records: dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def get(self, record_id: int) -> Optional[T]:
        with self._lock:
            return self._records.get(record_id)

    def list_all(self) -> list[T]:
        with self._lock:
            return [self._records[key] for key in sorted(self._records)]

    def add(self, record: T) -> T:
        with self._lock:
            stored = replace(record, id=self._next_id)
            self._records[stored.id] = stored
            self._next_id += 1
            return stored

    def update(self, record: T) -> T:
        with self._lock:
            if record.id not in self._records:
                raise KeyError(record.id)
            self._records[record.id] = record
            return record

    def delete(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class InMemoryUserRepository(InMemoryRepository[User], UserRepository):
    """User repository with case-insensitive email lookup."""

    def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        with self._lock:
            for user in self._records.values():
                if user.email.lower() == wanted:
                    return user
        return None

    def add_if_email_free(self, user: User) -> Optional[User]:
        with self._lock:
            if self.get_by_email(user.email) is not None:
                return None
            return self.add(user)


class InMemoryAuditLogRepository(AuditLogRepository):
    """Append-only audit log kept in insertion order."""

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        with self._lock:
            stored = replace(entry, id=len(self._entries) + 1)
            self._entries.append(stored)
            return stored

    def search(
        self,
        entity_type: Optional[str] = None,
        user_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        with self._lock:
            entries = list(reversed(self._entries))
        matches = [
            entry
            for entry in entries
            if (entity_type is None or entry.entity_type == entity_type)
            and (user_id is None or entry.user_id == user_id)
        ]
        return matches[:limit]


@dataclass
class InMemoryStore:
    """All repositories the API needs, sharing one process lifetime."""

    users: InMemoryUserRepository = field(default_factory=InMemoryUserRepository)
    clients: InMemoryRepository[Client] = field(default_factory=InMemoryRepository)
    products: InMemoryRepository[Product] = field(default_factory=InMemoryRepository)
    product_groups: InMemoryRepository[ProductGroup] = field(
        default_factory=InMemoryRepository
    )
    invoices: InMemoryRepository[Invoice] = field(default_factory=InMemoryRepository)
    deliveries: InMemoryRepository[Delivery] = field(default_factory=InMemoryRepository)
    audit_logs: InMemoryAuditLogRepository = field(
        default_factory=InMemoryAuditLogRepository
    )
