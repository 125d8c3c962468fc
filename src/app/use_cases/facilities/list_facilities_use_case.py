"""
List Facilities Use Case
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, access_scope, is_allowed
from .dtos import FacilityResponse, ListFacilitiesResponse


class ListFacilitiesUseCase:
    """
    Use case for listing facilities.

    Business Rules:
    - Every authenticated role may read facilities
    - clinic_admin only sees the facilities it created
    - Optional name filter is a case-insensitive substring match
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, name: Optional[str] = None
    ) -> Result[ListFacilitiesResponse]:
        # Owner-scoped rows are filtered by the scope; check role membership only
        if not is_allowed(actor, Action.read_resource, actor.account_id):
            return Return.err(Error(ErrorCode.FORBIDDEN, "Not allowed to view facilities"))

        async with self.uow:
            facilities = await self.uow.facilities.list(
                access_scope(actor.role, actor.account_id),
                name=name.strip() if name and name.strip() else None,
            )
            data = [FacilityResponse.from_facility(facility) for facility in facilities]
            return Return.ok(ListFacilitiesResponse(count=len(data), data=data))
