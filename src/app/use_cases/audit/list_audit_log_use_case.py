"""
List Audit Log Use Case

Filtered, newest-first view of the audit trail for system administrators.
"""

from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AuditLogEntryResponse, ListAuditLogResponse


def clamp_limit(limit: Optional[int]) -> int:
    """Default when absent or non-positive; never above AUDIT_LOG_MAX_LIMIT."""
    if limit is None or limit <= 0:
        return ApplicationConfig.AUDIT_LOG_DEFAULT_LIMIT
    return min(limit, ApplicationConfig.AUDIT_LOG_MAX_LIMIT)


class ListAuditLogUseCase:
    """
    Use case for reading the audit trail.

    Business Rules:
    - Only system-privileged actors may read the audit trail
    - Filters (target user, target internal id, action) are combined with AND
    - Default limit 20, capped at 200, newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: ActorContext,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Result[ListAuditLogResponse]:
        """
        Execute list audit log use case.

        Args:
            actor: Authenticated caller
            target_user_id: Only entries about this account id
            target_internal_id: Only entries about this internal id
            action: Only entries with this action name
            limit: Maximum number of entries

        Returns:
            Result with matching entries, or Error
        """
        if not is_allowed(actor, Action.view_audit_log):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can view audit logs")
            )

        async with self.uow:
            entries = await self.uow.audit_logs.list(
                target_user_id=target_user_id,
                target_internal_id=target_internal_id,
                action=action or None,
                limit=clamp_limit(limit),
            )
            data = [AuditLogEntryResponse.from_entry(entry) for entry in entries]
            return Return.ok(ListAuditLogResponse(count=len(data), data=data))
