"""
Provision Account Use Case

System administrators create clinic accounts with an initial password.
"""

from libs.result import Error, Result, Return
from src.app.services.audit_trail import AuditTrail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.credentials import hash_password_async, validate_password
from src.domain.entities import Account, Role, normalize_email
from src.domain.errors import DuplicateIdentityError, ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile, ProvisionAccountCommand


class ProvisionAccountUseCase:
    """
    Use case for provisioning a clinic account.

    Business Rules:
    - Only system-privileged actors may provision
    - Name, email and password (min 6 chars) are required
    - Email is stored lower-cased; login_id defaults to the email
    - Email and login_id must both be unused
    - New account: role=clinic_admin, state=active, must_change_password=True,
      created_by=actor
    - Records clinic_account_created
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, command: ProvisionAccountCommand
    ) -> Result[AccountProfile]:
        """
        Execute provision account use case.

        Args:
            actor: Authenticated caller
            command: Name, email, initial password and optional login ID

        Returns:
            Result with the new account's profile, or Error
        """
        if not is_allowed(actor, Action.provision_account):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can create accounts")
            )

        name = (command.name or "").strip()
        email = normalize_email(command.email or "")
        if not name or not email:
            return Return.err(
                Error(ErrorCode.VALIDATION_FAILED, "Name, email and password are required")
            )

        password_check = validate_password(command.password)
        if password_check.is_err():
            return password_check

        login_id = (command.login_id or "").strip() or email

        async with self.uow:
            if await self.uow.accounts.get_by_email(email):
                return Return.err(
                    Error(ErrorCode.DUPLICATE_IDENTITY, "This email address is already registered")
                )
            if await self.uow.accounts.get_by_login_id(login_id):
                return Return.err(
                    Error(ErrorCode.DUPLICATE_IDENTITY, "This login ID is already in use")
                )

            account = Account(
                name=name,
                email=email,
                login_id=login_id,
                password_hash=await hash_password_async(command.password),
                role=Role.clinic_admin,
                must_change_password=True,
                created_by=actor.account_id,
            )
            try:
                account = await self.uow.accounts.create(account)
                await self.uow.commit()
            except DuplicateIdentityError:
                await self.uow.rollback()
                return Return.err(
                    Error(ErrorCode.DUPLICATE_IDENTITY, "Email or login ID is already in use")
                )

            profile = AccountProfile.from_account(account)

            await AuditTrail(self.uow).record(
                actor.role,
                actor.account_id,
                "clinic_account_created",
                target_user_id=account.id,
                target_internal_id=account.internal_id,
                meta={"email": email, "login_id": login_id, "role": Role.clinic_admin.value},
            )

            return Return.ok(profile)
