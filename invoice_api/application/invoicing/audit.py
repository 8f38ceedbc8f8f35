"""
Audit trail.

Every mutation performed through the API appends one entry.
Input: actor id, action, entity type/id, short details.
Side effects: writes to the AuditLogRepository.
"""

import logging
from typing import Optional

from invoice_api.domain.invoicing.entities import AuditLogEntry
from invoice_api.domain.invoicing.ports import AuditLogRepository

logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 1000


class AuditTrail:
    """Records and searches audit log entries."""

    def __init__(self, repository: AuditLogRepository) -> None:
        self._repository = repository

    def record(
        self,
        actor_id: Optional[int],
        action: str,
        entity_type: str,
        entity_id: Optional[int] = None,
        details: str = "",
    ) -> AuditLogEntry:
        entry = self._repository.append(
            AuditLogEntry(
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                user_id=actor_id,
                details=details,
            )
        )
        logger.info(
            "Audit: user=%s action=%s %s=%s",
            actor_id,
            action,
            entity_type,
            entity_id,
        )
        return entry

    def search(
        self,
        entity_type: Optional[str] = None,
        user_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        """Return matching entries, newest first."""
        limit = max(1, min(limit, MAX_SEARCH_LIMIT))
        return self._repository.search(entity_type=entity_type, user_id=user_id, limit=limit)
