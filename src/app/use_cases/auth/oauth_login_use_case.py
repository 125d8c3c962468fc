"""
OAuth Login Use Case

Signs in with a verified provider profile, linking or creating the account.
"""

import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.audit_trail import AuditTrail
from src.app.services.oauth_client import OAuthProfile
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts.dtos import AccountProfile
from src.domain.entities import Account, ExternalIdentity, Role, normalize_email
from src.domain.errors import ConfigurationError, DuplicateIdentityError, ErrorCode
from .dtos import OAuthLoginResponse

logger = logging.getLogger(__name__)

OUTCOME_ACTIONS = {
    "authenticated": "oauth_login",
    "linked": "oauth_account_linked",
    "created": "oauth_account_created",
}


def profile_email(profile: OAuthProfile) -> str:
    """Provider email, or a stable synthetic one when the provider withholds it."""
    if profile.email and profile.email.strip():
        return normalize_email(profile.email)
    return f"{profile.provider_user_id}@{profile.provider.value}.com"


class OAuthLoginUseCase:
    """
    Use case for OAuth sign-in.

    Business Rules:
    - A known (provider, provider_user_id) signs in its linked account
    - Otherwise an account with the same email is linked to the identity
    - Otherwise a new staff account without password is created
    - Inactive accounts are refused and nothing is linked to them
    - Records oauth_login, oauth_account_linked or oauth_account_created
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, profile: OAuthProfile) -> Result[OAuthLoginResponse]:
        """
        Execute OAuth login use case.

        Args:
            profile: Verified profile returned by the provider

        Returns:
            Result with session token, profile and outcome, or Error
        """
        inactive = Error(
            ErrorCode.ACCOUNT_INACTIVE, "This account is inactive. Contact your administrator."
        )

        async with self.uow:
            identity = await self.uow.external_identities.get_by_provider_user(
                profile.provider, profile.provider_user_id
            )

            if identity is not None:
                outcome = "authenticated"
                account = await self.uow.accounts.get_by_id(identity.account_id)
                if account is None:
                    return Return.err(Error(ErrorCode.OAUTH_FAILED, "Linked account not found"))
                if not account.is_active:
                    return Return.err(inactive)
            else:
                email = profile_email(profile)
                account = await self.uow.accounts.get_by_email(email)
                try:
                    if account is not None:
                        if not account.is_active:
                            return Return.err(inactive)
                        outcome = "linked"
                        if not account.avatar and profile.avatar_url:
                            account.avatar = profile.avatar_url
                            account = await self.uow.accounts.update(account)
                    else:
                        outcome = "created"
                        account = await self.uow.accounts.create(
                            Account(
                                name=(profile.display_name or email.split("@")[0]).strip(),
                                email=email,
                                login_id=email,
                                role=Role.staff,
                                avatar=profile.avatar_url,
                            )
                        )
                    await self.uow.external_identities.create(
                        ExternalIdentity(
                            account_id=account.id,
                            provider=profile.provider,
                            provider_user_id=profile.provider_user_id,
                        )
                    )
                    await self.uow.commit()
                except DuplicateIdentityError:
                    await self.uow.rollback()
                    return Return.err(
                        Error(
                            ErrorCode.DUPLICATE_IDENTITY,
                            "This identity conflicts with an existing account",
                        )
                    )

            try:
                token = generate_jwt(account.id)
            except ConfigurationError as exc:
                logger.error(f"Cannot issue session token: {exc}")
                return Return.err(Error(ErrorCode.CONFIGURATION_ERROR, str(exc)))

            user = AccountProfile.from_account(account)

            await AuditTrail(self.uow).record(
                account.role,
                account.id,
                OUTCOME_ACTIONS[outcome],
                target_user_id=account.id,
                target_internal_id=account.internal_id,
                meta={"provider": profile.provider.value},
            )

            return Return.ok(OAuthLoginResponse(token=token, user=user, outcome=outcome))
