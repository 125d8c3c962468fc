"""
Create Facility Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Facility
from src.domain.errors import ErrorCode
from src.domain.policy import Action, ActorContext, is_allowed
from .dtos import CreateFacilityCommand, FacilityResponse


class CreateFacilityUseCase:
    """
    Use case for creating a facility.

    Business Rules:
    - Allowed for clinic_admin and system-privileged actors
    - The creator becomes the owner (created_by) and defines tenant membership
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: ActorContext, command: CreateFacilityCommand
    ) -> Result[FacilityResponse]:
        """
        Execute create facility use case.

        Args:
            actor: Authenticated caller
            command: Facility attributes

        Returns:
            Result with the created facility, or Error
        """
        if not is_allowed(actor, Action.create_resource):
            return Return.err(Error(ErrorCode.FORBIDDEN, "Not allowed to create facilities"))

        name = (command.name or "").strip()
        if not name:
            return Return.err(Error(ErrorCode.VALIDATION_FAILED, "Facility name is required"))

        async with self.uow:
            facility = Facility(
                **command.model_dump(exclude={"name"}),
                name=name,
                created_by=actor.account_id,
                updated_by=actor.account_id,
            )
            facility = await self.uow.facilities.create(facility)
            await self.uow.commit()
            return Return.ok(FacilityResponse.from_facility(facility))
