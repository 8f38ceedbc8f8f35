"""Persistence adapters."""

from invoice_api.infrastructure.persistence.memory import (
    InMemoryAuditLogRepository,
    InMemoryRepository,
    InMemoryStore,
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryAuditLogRepository",
    "InMemoryRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
