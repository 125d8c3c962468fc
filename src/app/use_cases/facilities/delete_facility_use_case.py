"""
Delete Facility Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, access_scope, is_allowed


class DeleteFacilityUseCase:
    """
    Use case for deleting a facility.

    Business Rules:
    - Same visibility and permission rules as update
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: ActorContext, facility_id: UUID) -> Result[None]:
        async with self.uow:
            facility = await self.uow.facilities.get_by_id(facility_id)
            scope = access_scope(actor.role, actor.account_id)
            if facility is None or not scope.permits(facility.created_by):
                return Return.err(Error(ErrorCode.NOT_FOUND, "Facility not found"))
            if not is_allowed(actor, Action.delete_resource, facility.created_by):
                return Return.err(Error(ErrorCode.FORBIDDEN, "Not allowed to delete facilities"))

            await self.uow.facilities.delete(facility)
            await self.uow.commit()
            return Return.ok(None)
