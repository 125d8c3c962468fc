"""
Hard Delete Account Use Case

Permanently removes a soft-deleted account and everything recorded about it.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import HardDeleteAccountResponse


class HardDeleteAccountUseCase:
    """
    Use case for permanent account deletion.

    Business Rules:
    - Only system-privileged actors may purge
    - The account must already be in state=deleted; otherwise nothing changes
    - Removes linked external identities, every audit entry whose target is
      the account (by id or internal id), then the account itself, in one
      transaction
    - Records clinic_account_purged afterwards without target fields, so the
      purged account leaves no trace in the audit trail
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, account_id: UUID
    ) -> Result[HardDeleteAccountResponse]:
        """
        Execute hard delete use case.

        Args:
            actor: Authenticated caller
            account_id: Target account

        Returns:
            Result with deletion counts, or Error
        """
        if not is_allowed(actor, Action.purge_account):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can purge accounts")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))
            if not account.is_deleted:
                return Return.err(
                    Error(
                        ErrorCode.PRECONDITION_FAILED,
                        "Account must be deleted before it can be permanently removed",
                    )
                )

            internal_id = account.internal_id
            identities_deleted = await self.uow.external_identities.delete_by_account(
                account_id
            )
            audit_entries_deleted = await self.uow.audit_logs.delete_for_target(
                account_id, internal_id
            )
            await self.uow.accounts.delete(account)
            await self.uow.commit()

            response = HardDeleteAccountResponse(
                status="purged",
                account_id=str(account_id),
                identities_deleted=identities_deleted,
                audit_entries_deleted=audit_entries_deleted,
            )

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                "clinic_account_purged",
                meta={
                    "identities_deleted": identities_deleted,
                    "audit_entries_deleted": audit_entries_deleted,
                },
            )

            return Return.ok(response)
