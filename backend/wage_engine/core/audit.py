from __future__ import annotations

from typing import Any, Dict, List, Protocol

from sqlalchemy.orm import Session

from wage_engine.core.logging import get_logger
from wage_engine.models.audit_log import AuditLog

logger = get_logger(__name__)


class AuditSink(Protocol):
    def record(
        self,
        *,
        actor_id: str,
        organization_id: str,
        action: str,
        entity: str,
        entity_id: str,
        detail: Dict[str, Any] | None = None,
    ) -> None: ...


class DatabaseAuditSink:
    """Adds audit rows to the caller's session so they commit with the change they describe."""

    def __init__(self, session: Session):
        self.session = session

    def record(
        self,
        *,
        actor_id: str,
        organization_id: str,
        action: str,
        entity: str,
        entity_id: str,
        detail: Dict[str, Any] | None = None,
    ) -> None:
        self.session.add(
            AuditLog(
                actor_id=actor_id,
                organization_id=organization_id,
                action=action,
                entity=entity,
                entity_id=entity_id,
                detail=detail,
            )
        )
        logger.info(
            "audit_recorded",
            action=action,
            entity=entity,
            entity_id=entity_id,
            actor_id=actor_id,
            organization_id=organization_id,
        )


class MemoryAuditSink:
    """Keeps records in a list instead of persisting them."""

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def record(self, **entry: Any) -> None:
        self.records.append(entry)
