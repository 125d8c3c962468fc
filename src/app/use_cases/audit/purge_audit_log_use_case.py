"""
Purge Audit Log Use Case

Deletes audit entries about a specific account.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import PurgeAuditLogResponse


class PurgeAuditLogUseCase:
    """
    Use case for purging audit entries.

    Business Rules:
    - Only system-privileged actors may purge
    - At least one of target_user_id or target_internal_id is required;
      the whole trail is never purged at once
    - An optional action narrows the purge further
    - Records audit_log_purged with the filters used and the count removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: ActorContext,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
    ) -> Result[PurgeAuditLogResponse]:
        """
        Execute purge audit log use case.

        Args:
            actor: Authenticated caller
            target_user_id: Purge entries about this account id
            target_internal_id: Purge entries about this internal id
            action: Only purge entries with this action name

        Returns:
            Result with the number of deleted entries, or Error
        """
        if not is_allowed(actor, Action.purge_audit_log):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can purge audit logs")
            )
        if target_user_id is None and target_internal_id is None:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_FAILED,
                    "target_user_id or target_internal_id is required",
                )
            )

        async with self.uow:
            deleted = await self.uow.audit_logs.delete_matching(
                target_user_id=target_user_id,
                target_internal_id=target_internal_id,
                action=action or None,
            )
            await self.uow.commit()

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                "audit_log_purged",
                meta={
                    "target_user_id": str(target_user_id) if target_user_id else None,
                    "target_internal_id": (
                        str(target_internal_id) if target_internal_id else None
                    ),
                    "action": action,
                    "deleted_count": deleted,
                },
            )

            return Return.ok(PurgeAuditLogResponse(deleted_count=deleted))
