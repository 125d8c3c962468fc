"""
Request Password Reset Use Case

Issues a single-use reset token and mails the reset link.
"""

import logging
from typing import Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.email_sender import EmailDeliveryError, IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.credentials import issue_reset_token
from src.domain.entities import normalize_email
from src.domain.errors import ConfigurationError, ErrorCode
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If the email exists, a password reset link has been sent"


def render_reset_email(name: str, reset_url: str, ttl_minutes: int) -> str:
    return (
        f"<p>Hello {name},</p>"
        f"<p>A password reset was requested for your account. "
        f"Use the link below within {ttl_minutes} minutes to choose a new password.</p>"
        f'<p><a href="{reset_url}">{reset_url}</a></p>'
        f"<p>If you did not request this, you can ignore this email.</p>"
    )


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown emails get the same success response (no enumeration)
    - Only the SHA-256 hash of the token is stored; a new request replaces
      any earlier token
    - The link is {FRONTEND_URL}/reset-password/{token}
    - If mail cannot be delivered the token is revoked and the request fails
      with EMAIL_DELIVERY_FAILED, unless expose_token_on_failure is set, in
      which case the token and link are returned to the caller
    - Records password_reset_requested
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        expose_token_on_failure: Optional[bool] = None,
        frontend_url: Optional[str] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.expose_token_on_failure = (
            ApplicationConfig.EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE
            if expose_token_on_failure is None
            else expose_token_on_failure
        )
        self.frontend_url = (frontend_url or ApplicationConfig.FRONTEND_URL).rstrip("/")

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address of the account

        Returns:
            Result with reset status, or Error when delivery failed
        """
        generic = RequestPasswordResetResponse(status="sent", message=GENERIC_MESSAGE)
        if not email or not email.strip():
            return Return.err(Error(ErrorCode.VALIDATION_FAILED, "Email is required"))

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))
            if account is None:
                return Return.ok(generic)

            reset = issue_reset_token()
            account.reset_token_hash = reset.token_hash
            account.reset_token_expires_at = reset.expires_at
            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            account_id, internal_id = account.id, account.internal_id
            role, name, recipient = account.role, account.name, account.email

            await AuditTrail(self.uow).record(
                role,
                account_id,
                "password_reset_requested",
                target_user_id=account_id,
                target_internal_id=internal_id,
                meta={"email": recipient},
            )

            reset_url = f"{self.frontend_url}/reset-password/{reset.token}"
            try:
                await self.email_sender.send(
                    recipient,
                    "Password reset",
                    render_reset_email(
                        name, reset_url, ApplicationConfig.RESET_TOKEN_TTL_MINUTES
                    ),
                )
            except (ConfigurationError, EmailDeliveryError) as exc:
                logger.error(f"Password reset email to account {account_id} not delivered: {exc}")

                if self.expose_token_on_failure:
                    logger.warning(
                        "Returning reset token in response; EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE is enabled"
                    )
                    return Return.ok(
                        RequestPasswordResetResponse(
                            status="sent",
                            message=GENERIC_MESSAGE,
                            reset_token=reset.token,
                            reset_url=reset_url,
                        )
                    )

                await self._revoke(account_id, reset.token_hash)
                return Return.err(
                    Error(
                        ErrorCode.EMAIL_DELIVERY_FAILED,
                        "Failed to send the password reset email. Please try again later.",
                    )
                )

            return Return.ok(generic)

    async def _revoke(self, account_id, token_hash: str) -> None:
        account = await self.uow.accounts.get_by_id(account_id)
        if account is None or account.reset_token_hash != token_hash:
            return
        account.clear_reset_token()
        await self.uow.accounts.update(account)
        await self.uow.commit()
