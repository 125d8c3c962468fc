from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import (
    ListAuditLogResponse,
    ListAuditLogUseCase,
    PurgeAuditLogResponse,
    PurgeAuditLogUseCase,
)
from src.depends import get_current_account, get_unit_of_work
from src.domain.policy import ActorContext

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListAuditLogResponse)
async def list_audit_logs(
    target_user_id: Optional[UUID] = Query(None),
    target_internal_id: Optional[UUID] = Query(None),
    action: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, description="Default 20, max 200"),
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Audit Log Entries

    Newest first.

    Raises:
        - 403 Forbidden: Caller is not a system administrator
    """
    result = await ListAuditLogUseCase(uow).execute(
        actor,
        target_user_id=target_user_id,
        target_internal_id=target_internal_id,
        action=action,
        limit=limit,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("", status_code=status.HTTP_200_OK, response_model=PurgeAuditLogResponse)
async def purge_audit_logs(
    target_user_id: Optional[UUID] = Query(None),
    target_internal_id: Optional[UUID] = Query(None),
    action: Optional[str] = Query(None),
    actor: ActorContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Purge Audit Log Entries

    Raises:
        - 400 Bad Request: Neither target_user_id nor target_internal_id given
        - 403 Forbidden: Caller is not a system administrator
    """
    result = await PurgeAuditLogUseCase(uow).execute(
        actor,
        target_user_id=target_user_id,
        target_internal_id=target_internal_id,
        action=action,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
