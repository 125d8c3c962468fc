"""
Set Account Status Use Case

Suspends or resumes an account.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile


class SetAccountStatusUseCase:
    """
    Use case for suspending or resuming an account.

    Business Rules:
    - Only system-privileged actors may change status
    - Actors cannot change their own status
    - Deleted accounts cannot be resumed here; reissuing a password restores them
    - Suspended accounts cannot log in and their outstanding tokens are
      rejected on the next request
    - Records clinic_account_suspended or clinic_account_resumed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, account_id: UUID, active: bool
    ) -> Result[AccountProfile]:
        """
        Execute set account status use case.

        Args:
            actor: Authenticated caller
            account_id: Target account
            active: True to resume, False to suspend

        Returns:
            Result with the updated profile, or Error
        """
        if not is_allowed(actor, Action.set_account_status):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can change account status")
            )
        if account_id == actor.account_id:
            return Return.err(
                Error(ErrorCode.PRECONDITION_FAILED, "You cannot change the status of your own account")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))
            if account.is_deleted:
                return Return.err(
                    Error(
                        ErrorCode.PRECONDITION_FAILED,
                        "Account is deleted; reissue its password to restore it",
                    )
                )

            previous_state = account.state.value
            if active:
                account.mark_active()
                action = "clinic_account_resumed"
            else:
                account.mark_suspended()
                action = "clinic_account_suspended"

            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            profile = AccountProfile.from_account(account)

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                action,
                target_user_id=account.id,
                target_internal_id=account.internal_id,
                meta={"previous_state": previous_state, "state": profile.state},
            )

            return Return.ok(profile)
