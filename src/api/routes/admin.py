"""
Admin API Routes - Account Lifecycle

Suspend, resume, delete, purge and password reissue for accounts. All
endpoints require a system administrator token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    AccountProfile,
    HardDeleteAccountResponse,
    HardDeleteAccountUseCase,
    ReissuePasswordResponse,
    ReissuePasswordUseCase,
    SetAccountStatusUseCase,
    SoftDeleteAccountUseCase,
)
from src.depends import get_current_account, get_unit_of_work
from src.domain.policy import ActorContext

router = APIRouter(prefix="/admin/accounts", tags=["Admin"])


class AccountStatusRequest(BaseModel):
    is_active: bool = Field(..., description="True to resume, False to suspend")


@router.patch(
    "/{account_id}/status", status_code=status.HTTP_200_OK, response_model=AccountProfile
)
async def set_account_status(
    account_id: UUID,
    request: AccountStatusRequest,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend or Resume Account

    Raises:
        - 403 Forbidden: Caller is not a system administrator
        - 404 Not Found: Account does not exist
        - 409 Conflict: Own account, or account is deleted
    """
    result = await SetAccountStatusUseCase(uow).execute(actor, account_id, request.is_active)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountProfile)
async def delete_account(
    account_id: UUID,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft Delete Account

    Raises:
        - 403 Forbidden: Caller is not a system administrator
        - 404 Not Found: Account does not exist
        - 409 Conflict: Own account
    """
    result = await SoftDeleteAccountUseCase(uow).execute(actor, account_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{account_id}/permanent",
    status_code=status.HTTP_200_OK,
    response_model=HardDeleteAccountResponse,
)
async def purge_account(
    account_id: UUID,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Permanently Delete Account

    Only soft-deleted accounts can be purged. Removes linked identities and
    the account's audit history.

    Raises:
        - 403 Forbidden: Caller is not a system administrator
        - 404 Not Found: Account does not exist
        - 409 Conflict: Account is not deleted
    """
    result = await HardDeleteAccountUseCase(uow).execute(actor, account_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{account_id}/reissue-password",
    status_code=status.HTTP_200_OK,
    response_model=ReissuePasswordResponse,
)
async def reissue_password(
    account_id: UUID,
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reissue Password

    Returns a temporary password once and reactivates the account.

    Raises:
        - 403 Forbidden: Caller is not a system administrator
        - 404 Not Found: Account does not exist
    """
    result = await ReissuePasswordUseCase(uow).execute(actor, account_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
