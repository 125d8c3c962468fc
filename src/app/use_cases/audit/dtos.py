"""
Audit Log Use Case DTOs
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.domain.entities import AuditLogEntry


class AuditLogEntryResponse(BaseModel):
    """Single audit trail entry"""

    id: str
    actor_role: str
    actor_id: str
    action: str
    target_user_id: Optional[str] = None
    target_internal_id: Optional[str] = None
    meta: Dict[str, Any] = {}
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> "AuditLogEntryResponse":
        return cls(
            id=str(entry.id),
            actor_role=entry.actor_role,
            actor_id=str(entry.actor_id),
            action=entry.action,
            target_user_id=str(entry.target_user_id) if entry.target_user_id else None,
            target_internal_id=(
                str(entry.target_internal_id) if entry.target_internal_id else None
            ),
            meta=entry.meta or {},
            created_at=entry.created_at,
        )


class ListAuditLogResponse(BaseModel):
    count: int
    data: List[AuditLogEntryResponse]


class PurgeAuditLogResponse(BaseModel):
    deleted_count: int
