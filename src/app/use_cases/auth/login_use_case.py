"""
Login Use Case

Authenticates an account by email or login ID and password and issues a
session token.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts.dtos import AccountProfile
from src.domain.base import utcnow
from src.domain.credentials import burn_verification_time, verify_password_async
from src.domain.entities import Account, normalize_email
from src.domain.errors import ConfigurationError, ErrorCode
from .dtos import LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email/login ID or password"


class LoginUseCase:
    """
    Use case for password login.

    Business Rules:
    - The identifier is tried as an email (case-insensitive), then as a
      login ID (exact match)
    - Unknown identifier and wrong password produce the same error; a dummy
      hash check keeps timing uniform
    - Inactive status is only revealed after the password verified
    - last_login_at/last_login_ip are updated best-effort; a failure there
      does not fail the login
    - Records login_success
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        password: str,
        email: Optional[str] = None,
        login_id: Optional[str] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            password: Plain text password
            email: Email identifier, if given
            login_id: Login ID identifier, if given
            ip: Client IP for bookkeeping
            user_agent: Client user agent for the audit record

        Returns:
            Result with LoginResponse containing the token and profile, or Error
        """
        if not password or not ((email or "").strip() or (login_id or "").strip()):
            return Return.err(
                Error(ErrorCode.VALIDATION_FAILED, "Email or login ID and password are required")
            )

        async with self.uow:
            account = await self._find_account(email, login_id)

            if account is None:
                await burn_verification_time(password)
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            if not await verify_password_async(password, account.password_hash):
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            if not account.is_active:
                return Return.err(
                    Error(
                        ErrorCode.ACCOUNT_INACTIVE,
                        "This account is inactive. Contact your administrator.",
                    )
                )

            try:
                token = generate_jwt(account.id)
            except ConfigurationError as exc:
                logger.error(f"Cannot issue session token: {exc}")
                return Return.err(Error(ErrorCode.CONFIGURATION_ERROR, str(exc)))

            # Profile reports the previous login, before bookkeeping
            profile = AccountProfile.from_account(account)
            account_id, internal_id, role = account.id, account.internal_id, account.role
            login_id, email_address = account.login_id, account.email

            try:
                account.last_login_at = utcnow()
                account.last_login_ip = ip
                await self.uow.accounts.update(account)
                await self.uow.commit()
            except Exception as exc:
                logger.warning(f"Failed to record last login for {account_id}: {exc}")
                await self.uow.rollback()

            await AuditTrail(self.uow).record(
                role,
                account_id,
                "login_success",
                target_user_id=account_id,
                target_internal_id=internal_id,
                meta={
                    "login_id": login_id,
                    "email": email_address,
                    "ip": ip,
                    "user_agent": user_agent,
                },
            )

            return Return.ok(LoginResponse(token=token, user=profile))

    async def _find_account(
        self, email: Optional[str], login_id: Optional[str]
    ) -> Optional[Account]:
        account = None
        if email and email.strip():
            account = await self.uow.accounts.get_by_email(normalize_email(email))
            if account is None:
                # Clients may send a login ID in the email field
                account = await self.uow.accounts.get_by_login_id(email.strip())
        if account is None and login_id and login_id.strip():
            account = await self.uow.accounts.get_by_login_id(login_id.strip())
        return account
