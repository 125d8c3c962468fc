from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.facilities import (
    CreateFacilityCommand,
    CreateFacilityUseCase,
    DeleteFacilityUseCase,
    FacilityResponse,
    GetFacilityUseCase,
    ListFacilitiesResponse,
    ListFacilitiesUseCase,
    UpdateFacilityCommand,
    UpdateFacilityUseCase,
)
from src.depends import get_current_account, get_unit_of_work
from src.domain.policy import ActorContext

router = APIRouter(prefix="/facilities", tags=["Facilities"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListFacilitiesResponse)
async def list_facilities(
    name: Optional[str] = Query(None, description="Case-insensitive name filter"),
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListFacilitiesUseCase(uow).execute(actor, name)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FacilityResponse)
async def create_facility(
    request: CreateFacilityCommand,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Facility

    Raises:
        - 403 Forbidden: Role may not create facilities
    """
    result = await CreateFacilityUseCase(uow).execute(actor, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{facility_id}", status_code=status.HTTP_200_OK, response_model=FacilityResponse)
async def get_facility(
    facility_id: UUID,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetFacilityUseCase(uow).execute(actor, facility_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/{facility_id}", status_code=status.HTTP_200_OK, response_model=FacilityResponse)
async def update_facility(
    facility_id: UUID,
    request: UpdateFacilityCommand,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Facility

    Raises:
        - 403 Forbidden: Role may not modify facilities
        - 404 Not Found: Missing, or owned by another clinic
    """
    result = await UpdateFacilityUseCase(uow).execute(actor, facility_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{facility_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_facility(
    facility_id: UUID,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteFacilityUseCase(uow).execute(actor, facility_id)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
