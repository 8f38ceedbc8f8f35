"""
Generic record service.

Create/read/update/delete over a Repository port, with every
mutation written to the audit trail. Resource services subclass
this and add their own queries.
"""

import logging
from dataclasses import replace
from typing import Any, Generic, Mapping, Optional, TypeVar

from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.domain.invoicing.entities import utcnow
from invoice_api.domain.invoicing.errors import RecordNotFoundError
from invoice_api.domain.invoicing.ports import Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordService(Generic[T]):
    """Base service for records identified by an integer id.

    Subclasses set `record_type`, `entity_label` (used in error
    messages) and `entity_type` (used in audit entries).
    """

    record_type: type
    entity_label = "Record"
    entity_type = "record"

    def __init__(self, repository: Repository[T], audit: AuditTrail) -> None:
        self._repository = repository
        self._audit = audit

    def list_all(self) -> list[T]:
        return self._repository.list_all()

    def get(self, record_id: int) -> T:
        """Return the record or raise RecordNotFoundError."""
        record = self._repository.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.entity_label, record_id)
        return record

    def create(self, actor_id: Optional[int], fields: Mapping[str, Any]) -> T:
        self._validate(fields)
        stored = self._repository.add(self.record_type(**fields))
        self._audit.record(actor_id, "create", self.entity_type, stored.id, self._describe(stored))
        return stored

    def update(self, actor_id: Optional[int], record_id: int, changes: Mapping[str, Any]) -> T:
        current = self.get(record_id)
        self._validate(changes)
        updated = self._repository.update(replace(current, **changes, updated_at=utcnow()))
        self._audit.record(
            actor_id,
            "update",
            self.entity_type,
            record_id,
            ", ".join(sorted(changes)) or "no changes",
        )
        return updated

    def delete(self, actor_id: Optional[int], record_id: int) -> None:
        record = self.get(record_id)
        self._repository.delete(record_id)
        self._audit.record(actor_id, "delete", self.entity_type, record_id, self._describe(record))

    def _validate(self, fields: Mapping[str, Any]) -> None:
        """Hook for reference checks before a write."""

    def _describe(self, record: T) -> str:
        return str(getattr(record, "name", "") or "")
