"""
Update Profile Use Case

Lets an authenticated account edit its own profile and change its password.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.credentials import (
    hash_password_async,
    validate_password,
    verify_password_async,
)
from src.domain.entities import CredentialState, normalize_email
from src.domain.errors import DuplicateIdentityError, ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile, UpdateProfileCommand


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class UpdateProfileUseCase:
    """
    Use case for self-service profile update.

    Business Rules:
    - A role change requires system privilege and is checked before anything
      else; a denied role change leaves the account untouched
    - old_password, new_password and confirm_password are all-or-nothing;
      new and confirm must match and satisfy the password policy
    - The old password must verify unless the account is OAuth-only
    - A successful password change clears must_change_password
    - A new email or login ID must not belong to another account
    - Records profile_updated with the names of the changed fields
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, command: UpdateProfileCommand
    ) -> Result[AccountProfile]:
        """
        Execute update profile use case.

        Args:
            actor: Authenticated caller (the account being updated)
            command: Fields to change; None means unchanged

        Returns:
            Result with the updated profile, or Error
        """
        if command.role is not None and not is_allowed(actor, Action.change_role):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only administrators can change roles")
            )

        password_fields = [
            command.old_password,
            command.new_password,
            command.confirm_password,
        ]
        changing_password = any(_present(value) for value in password_fields)
        if changing_password:
            if not all(_present(value) for value in password_fields):
                return Return.err(
                    Error(
                        ErrorCode.VALIDATION_FAILED,
                        "Current password, new password and confirmation are all required",
                    )
                )
            if command.new_password != command.confirm_password:
                return Return.err(
                    Error(
                        ErrorCode.VALIDATION_FAILED,
                        "New password and confirmation do not match",
                    )
                )
            password_check = validate_password(command.new_password)
            if password_check.is_err():
                return password_check

        async with self.uow:
            account = await self.uow.accounts.get_by_id(actor.account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))

            new_email = normalize_email(command.email) if _present(command.email) else None
            if new_email and new_email != account.email:
                if await self.uow.accounts.get_by_email(new_email):
                    return Return.err(
                        Error(
                            ErrorCode.DUPLICATE_IDENTITY,
                            "This email address is already registered",
                        )
                    )
            else:
                new_email = None

            new_login_id = command.login_id.strip() if _present(command.login_id) else None
            if new_login_id and new_login_id != account.login_id:
                if await self.uow.accounts.get_by_login_id(new_login_id):
                    return Return.err(
                        Error(ErrorCode.DUPLICATE_IDENTITY, "This login ID is already in use")
                    )
            else:
                new_login_id = None

            if changing_password:
                identities = await self.uow.external_identities.list_by_account(account.id)
                credential_state = account.credential_state(len(identities))
                # Accounts without a password hash set one without the old check
                if credential_state in (CredentialState.password, CredentialState.both):
                    if not await verify_password_async(
                        command.old_password, account.password_hash
                    ):
                        return Return.err(
                            Error(ErrorCode.VALIDATION_FAILED, "Current password is incorrect")
                        )

            # All checks passed; mutate
            changed: List[str] = []
            if _present(command.name) and command.name.strip() != account.name:
                account.name = command.name.strip()
                changed.append("name")
            if new_email:
                account.email = new_email
                changed.append("email")
            if new_login_id:
                account.login_id = new_login_id
                changed.append("login_id")
            if command.phone is not None:
                account.phone = command.phone.strip() or None
                changed.append("phone")
            if command.address is not None:
                account.address = command.address.strip() or None
                changed.append("address")
            if command.role is not None and command.role != account.role:
                account.role = command.role
                changed.append("role")
            if changing_password:
                account.password_hash = await hash_password_async(command.new_password)
                account.must_change_password = False
                changed.append("password")

            account.updated_at = utcnow()
            try:
                account = await self.uow.accounts.update(account)
                await self.uow.commit()
            except DuplicateIdentityError:
                await self.uow.rollback()
                return Return.err(
                    Error(ErrorCode.DUPLICATE_IDENTITY, "Email or login ID is already in use")
                )

            profile = AccountProfile.from_account(account)

            if changed:
                await AuditTrail(self.uow).record(
                    actor.role,
                    actor.account_id,
                    "profile_updated",
                    target_user_id=account.id,
                    target_internal_id=account.internal_id,
                    meta={"fields": changed},
                )

            return Return.ok(profile)
