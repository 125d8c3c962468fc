"""
Soft Delete Account Use Case

Marks an account deleted without removing its data.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile


class SoftDeleteAccountUseCase:
    """
    Use case for soft-deleting an account.

    Business Rules:
    - Only system-privileged actors may delete
    - Actors cannot delete themselves
    - Sets state=deleted and deleted_at, revokes any pending reset token
    - Deleting an already deleted account is a no-op success
    - Records clinic_account_deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: ActorContext, account_id: UUID) -> Result[AccountProfile]:
        """
        Execute soft delete use case.

        Args:
            actor: Authenticated caller
            account_id: Target account

        Returns:
            Result with the deleted account's profile, or Error
        """
        if not is_allowed(actor, Action.delete_account):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can delete accounts")
            )
        if account_id == actor.account_id:
            return Return.err(
                Error(ErrorCode.PRECONDITION_FAILED, "You cannot delete your own account")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))

            if account.is_deleted:
                return Return.ok(AccountProfile.from_account(account))

            previous_state = account.state.value
            account.mark_deleted()
            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            profile = AccountProfile.from_account(account)

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                "clinic_account_deleted",
                target_user_id=account.id,
                target_internal_id=account.internal_id,
                meta={"previous_state": previous_state},
            )

            return Return.ok(profile)
