from uuid import uuid4

import pytest

from config import ApplicationConfig
from src.app.use_cases.audit import ListAuditLogUseCase, PurgeAuditLogUseCase, clamp_limit
from src.domain.entities import AuditLogEntry
from src.domain.errors import ErrorCode


def test_clamp_limit():
    assert clamp_limit(None) == ApplicationConfig.AUDIT_LOG_DEFAULT_LIMIT
    assert clamp_limit(0) == ApplicationConfig.AUDIT_LOG_DEFAULT_LIMIT
    assert clamp_limit(50) == 50
    assert clamp_limit(10_000) == ApplicationConfig.AUDIT_LOG_MAX_LIMIT


@pytest.mark.asyncio
async def test_list_passes_filters(mock_uow, system_actor):
    target = uuid4()
    mock_uow.audit_logs.list.return_value = [
        AuditLogEntry(
            actor_role="system_admin",
            actor_id=system_actor.account_id,
            action="clinic_account_created",
            target_user_id=target,
            meta={"email": "a@example.com"},
        )
    ]

    result = await ListAuditLogUseCase(mock_uow).execute(
        system_actor, target_user_id=target, action="clinic_account_created", limit=500
    )

    assert result.value.count == 1
    assert result.value.data[0].target_user_id == str(target)
    mock_uow.audit_logs.list.assert_called_once_with(
        target_user_id=target,
        target_internal_id=None,
        action="clinic_account_created",
        limit=200,
    )


@pytest.mark.asyncio
async def test_list_forbidden(mock_uow, clinic_actor):
    result = await ListAuditLogUseCase(mock_uow).execute(clinic_actor)

    assert result.error.code == ErrorCode.FORBIDDEN


@pytest.mark.asyncio
async def test_purge_requires_target(mock_uow, system_actor):
    result = await PurgeAuditLogUseCase(mock_uow).execute(system_actor, action="login_success")

    assert result.error.code == ErrorCode.VALIDATION_FAILED
    mock_uow.audit_logs.delete_matching.assert_not_called()


@pytest.mark.asyncio
async def test_purge_by_internal_id(mock_uow, system_actor):
    internal_id = uuid4()
    mock_uow.audit_logs.delete_matching.return_value = 3

    result = await PurgeAuditLogUseCase(mock_uow).execute(
        system_actor, target_internal_id=internal_id
    )

    assert result.value.deleted_count == 3
    mock_uow.audit_logs.delete_matching.assert_called_once_with(
        target_user_id=None, target_internal_id=internal_id, action=None
    )
