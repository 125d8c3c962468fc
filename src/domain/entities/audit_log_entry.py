"""
AuditLogEntry Entity

Append-only log of administrative and authentication actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditLogEntry(SQLModel, table=True):
    """
    AuditLogEntry entity - who did what to whom.

    Business Rules:
    - Never updated; only deleted by filtered purge or when the target
      account is permanently deleted
    - target_internal_id survives login/email changes of the target
    - meta holds free-form context (IP, user agent, changed fields)
    """

    __tablename__ = "audit_log_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_role: str = Field(max_length=50)
    actor_id: UUID = Field(index=True)

    action: str = Field(max_length=100)  # e.g., "clinic_account_created"

    target_user_id: Optional[UUID] = Field(default=None, index=True)
    target_internal_id: Optional[UUID] = Field(default=None, index=True)

    meta: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_log_created_at", "created_at"),
        Index("idx_audit_log_action", "action"),
    )
