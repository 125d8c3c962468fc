"""
Get Profile Use Case

Returns the caller's own account profile.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import ActorContext
from .dtos import AccountProfile


class GetProfileUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: ActorContext) -> Result[AccountProfile]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(actor.account_id)
            if account is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Account not found"))
            return Return.ok(AccountProfile.from_account(account))
