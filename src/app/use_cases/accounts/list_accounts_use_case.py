"""
List Accounts Use Case

Account directory for system administrators.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Role
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import AccountProfile, ListAccountsResponse


def parse_role_filter(raw: Optional[str]) -> Optional[List[Role]]:
    """
    Parse a comma-separated role filter.

    Returns None when no filter is given. Raises ValueError on an unknown role.
    """
    if raw is None or not raw.strip():
        return None
    return [Role(part.strip()) for part in raw.split(",") if part.strip()]


class ListAccountsUseCase:
    """
    Use case for listing accounts.

    Business Rules:
    - Only system-privileged actors may list accounts
    - The optional role filter only narrows the result set; it never grants
      visibility the actor lacks
    - Deleted and suspended accounts are included; sorted by name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, role_filter: Optional[str] = None
    ) -> Result[ListAccountsResponse]:
        """
        Execute list accounts use case.

        Args:
            actor: Authenticated caller
            role_filter: Comma-separated roles, e.g. "clinic_admin,staff"

        Returns:
            Result with the matching accounts, or Error
        """
        if not is_allowed(actor, Action.list_accounts):
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only system administrators can list accounts")
            )

        try:
            roles = parse_role_filter(role_filter)
        except ValueError:
            return Return.err(
                Error(ErrorCode.VALIDATION_FAILED, f"Invalid role filter: {role_filter}")
            )

        async with self.uow:
            accounts = await self.uow.accounts.list(roles=roles)
            data = [AccountProfile.from_account(account) for account in accounts]
            return Return.ok(ListAccountsResponse(count=len(data), data=data))
