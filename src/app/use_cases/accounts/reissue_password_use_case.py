"""
Reissue Password Use Case

Issues a temporary password and restores the account to active.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.credentials import generate_temporary_password, hash_password_async
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile, ReissuePasswordResponse


class ReissuePasswordUseCase:
    """
    Use case for reissuing an account password.

    Business Rules:
    - Only system-privileged actors may reissue
    - Generates a 12-character temporary password, returned exactly once
    - Sets must_change_password=True, state=active, clears deleted_at and
      any pending reset token; this is also how a deleted account is restored
    - Records clinic_password_reissued
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, account_id: UUID
    ) -> Result[ReissuePasswordResponse]:
        """
        Execute reissue password use case.

        Args:
            actor: Authenticated caller
            account_id: Target account

        Returns:
            Result with the temporary password and updated profile, or Error
        """
        if not is_allowed(actor, Action.reissue_password):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can reissue passwords")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))

            previous_state = account.state.value
            temporary_password = generate_temporary_password()

            account.password_hash = await hash_password_async(temporary_password)
            account.must_change_password = True
            account.clear_reset_token()
            account.mark_active()

            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            profile = AccountProfile.from_account(account)

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                "clinic_password_reissued",
                target_user_id=account.id,
                target_internal_id=account.internal_id,
                meta={"previous_state": previous_state},
            )

            return Return.ok(
                ReissuePasswordResponse(temporary_password=temporary_password, account=profile)
            )
