"""
Audit Trail

Best-effort writer for AuditLogEntry records. Callers commit their own state
change first and then record; a failing audit write is logged and rolled
back on its own, and never reported to the caller.
"""

import logging
from typing import Any, Dict, Optional, Union
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditLogEntry, Role

logger = logging.getLogger(__name__)


class AuditTrail:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        actor_role: Union[Role, str],
        actor_id: UUID,
        action: str,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditLogEntry]:
        """
        Append an entry and commit it.

        Returns the stored entry, or None when the write failed.
        """
        role_value = actor_role.value if isinstance(actor_role, Role) else actor_role
        entry = AuditLogEntry(
            actor_role=role_value,
            actor_id=actor_id,
            action=action,
            target_user_id=target_user_id,
            target_internal_id=target_internal_id,
            meta=meta or {},
        )
        try:
            entry = await self.uow.audit_logs.create(entry)
            await self.uow.commit()
            return entry
        except Exception as exc:
            logger.error(f"Audit log write failed for action={action}: {exc}")
            try:
                await self.uow.rollback()
            except Exception as rollback_exc:
                logger.error(f"Audit log rollback failed: {rollback_exc}")
            return None
