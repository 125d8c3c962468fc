from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    AccountProfile,
    GetProfileUseCase,
    ListAccountsResponse,
    ListAccountsUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_current_account, get_unit_of_work
from src.domain.entities import Role
from src.domain.policy import ActorContext

router = APIRouter(prefix="/users", tags=["User"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListAccountsResponse)
async def list_users(
    role: Optional[str] = Query(None, description="Comma-separated roles"),
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Accounts

    Raises:
        - 400 Bad Request: Unknown role in filter
        - 403 Forbidden: Caller is not a system administrator
    """
    result = await ListAccountsUseCase(uow).execute(actor, role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def get_profile(
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current account profile"""
    result = await GetProfileUseCase(uow).execute(actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateProfileRequest(BaseModel):
    """
    Profile update payload

    Absent fields are left unchanged. Changing the password needs all of
    old_password, new_password and confirm_password.
    """

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    login_id: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    role: Optional[Role] = None
    old_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None


@router.put("/profile", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def update_profile(
    request: UpdateProfileRequest,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Own Profile

    Raises:
        - 400 Bad Request: Incomplete password change, mismatch, wrong
          current password or password too short
        - 403 Forbidden: Role change without system privilege
        - 409 Conflict: Email or login ID already in use
    """
    command = UpdateProfileCommand(**request.model_dump())
    result = await UpdateProfileUseCase(uow).execute(actor, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
