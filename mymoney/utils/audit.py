"""
Structured Audit Logging Utility.

Every create, update and delete of a budget item, category or transaction
is logged as one structured JSON object.  Provides a Pydantic-validated
model and a single function for consistent audit entries.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from mymoney.logger import StructuredLogger

__all__ = ["AuditEvent", "log_audit_event"]

# Scalar type permitted inside the ``details`` mapping.
DetailValue = Union[str, int, float, bool, None]


class AuditEvent(BaseModel):
    """Schema-validated representation of a single audit entry."""

    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    user_id: Optional[str] = None
    details: dict[str, DetailValue] = Field(default_factory=dict)


def log_audit_event(
    logger: StructuredLogger,
    action: str,
    entity_type: str,
    entity_id: str,
    user_id: Optional[str] = None,
    details: Optional[dict[str, DetailValue]] = None,
) -> AuditEvent:
    """Log a structured JSON audit event and return it.

    Args:
        logger: The logger instance to write to.
        action: What happened (``"CREATE"``, ``"UPDATE"``, ``"DELETE"``,
            ``"SEED"``).
        entity_type: Type of entity affected (e.g. ``"Category"``).
        entity_id: Identifier of the affected entity.
        user_id: Owner of the entity, when known.  Updates and deletes
            address rows by id only, so they usually omit it.
        details: Optional additional context (e.g. changed field names).
    """
    event = AuditEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        details=details or {},
    )
    logger.info(
        "AUDIT: %s",
        json.dumps(event.model_dump(), default=str),
        extra={"event": f"{entity_type.upper()}_{action}"},
    )
    return event
