"""
Get Facility Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import FacilityResponse


class GetFacilityUseCase:
    """
    Business Rules:
    - Another tenant's facility is reported as not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: ActorContext, facility_id: UUID) -> Result[FacilityResponse]:
        async with self.uow:
            facility = await self.uow.facilities.get_by_id(facility_id)
            if facility is None or not is_allowed(
                actor, Action.read_resource, facility.created_by
            ):
                return Return.err(Error(ErrorCode.NOT_FOUND, "Facility not found"))
            return Return.ok(FacilityResponse.from_facility(facility))
