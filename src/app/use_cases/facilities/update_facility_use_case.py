"""
Update Facility Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, access_scope, is_allowed
from .dtos import FacilityResponse, UpdateFacilityCommand


class UpdateFacilityUseCase:
    """
    Use case for updating a facility.

    Business Rules:
    - A facility outside the actor's scope is reported as not found
    - Within scope, only clinic_admin and system-privileged actors may update
    - updated_by records the actor
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, facility_id: UUID, command: UpdateFacilityCommand
    ) -> Result[FacilityResponse]:
        """
        Execute update facility use case.

        Args:
            actor: Authenticated caller
            facility_id: Facility to update
            command: Fields to change

        Returns:
            Result with the updated facility, or Error
        """
        async with self.uow:
            facility = await self.uow.facilities.get_by_id(facility_id)
            scope = access_scope(actor.role, actor.account_id)
            if facility is None or not scope.permits(facility.created_by):
                return Return.err(Error(ErrorCode.NOT_FOUND, "Facility not found"))
            if not is_allowed(actor, Action.update_resource, facility.created_by):
                return Return.err(Error(ErrorCode.FORBIDDEN, "Not allowed to update facilities"))

            changes = command.model_dump(exclude_none=True)
            if "name" in changes:
                changes["name"] = changes["name"].strip()
                if not changes["name"]:
                    return Return.err(
                        Error(ErrorCode.VALIDATION_FAILED, "Facility name is required")
                    )
            for field, value in changes.items():
                setattr(facility, field, value)
            facility.updated_by = actor.account_id
            facility.updated_at = utcnow()

            facility = await self.uow.facilities.update(facility)
            await self.uow.commit()
            return Return.ok(FacilityResponse.from_facility(facility))
