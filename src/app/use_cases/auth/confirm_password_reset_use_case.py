"""
Confirm Password Reset Use Case

Consumes a reset token and sets a new password.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts.dtos import AccountProfile
from src.domain.base import utcnow
from src.domain.credentials import hash_password_async, hash_reset_token, validate_password
from src.domain.errors import ConfigurationError, ErrorCode
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - The token is looked up by its SHA-256 hash
    - An expired token is cleared and rejected
    - A token is single use; it is cleared together with the password change
    - Clears must_change_password
    - A session token is returned only if the account is active
    - Records password_reset_completed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Plain reset token from the emailed link
            new_password: New password (6 characters to 72 bytes)

        Returns:
            Result with status, optional session token and profile, or Error
        """
        password_check = validate_password(new_password)
        if password_check.is_err():
            return password_check

        invalid = Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, "Invalid or expired token")
        if not token:
            return Return.err(invalid)

        async with self.uow:
            account = await self.uow.accounts.get_by_reset_token_hash(hash_reset_token(token))
            if account is None:
                return Return.err(invalid)

            if account.reset_token_expires_at is None or account.reset_token_expires_at < utcnow():
                account.clear_reset_token()
                await self.uow.accounts.update(account)
                await self.uow.commit()
                logger.info(f"Expired reset token presented for account {account.id}")
                return Return.err(invalid)

            account.password_hash = await hash_password_async(new_password)
            account.must_change_password = False
            account.clear_reset_token()
            account.updated_at = utcnow()
            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            profile = AccountProfile.from_account(account)

            session_token: Optional[str] = None
            if account.is_active:
                try:
                    session_token = generate_jwt(account.id)
                except ConfigurationError as exc:
                    logger.error(f"Password reset succeeded but no session token issued: {exc}")

            await AuditTrail(self.uow).record(
                account.role,
                account.id,
                "password_reset_completed",
                target_user_id=account.id,
                target_internal_id=account.internal_id,
            )

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                    token=session_token,
                    user=profile,
                )
            )
