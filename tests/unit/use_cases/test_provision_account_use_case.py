from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.accounts import ProvisionAccountCommand, ProvisionAccountUseCase
from src.domain.credentials import verify_password
from src.domain.entities import Role
from src.domain.errors import DuplicateIdentityError, ErrorCode


def _command(**kwargs) -> ProvisionAccountCommand:
    data = dict(name="Sunrise Dental", email="Owner@Sunrise.example", password="Initial1")
    data.update(kwargs)
    return ProvisionAccountCommand(**data)


@pytest.mark.asyncio
async def test_provision_clinic_account(mock_uow, system_actor, recorded_actions):
    result = await ProvisionAccountUseCase(mock_uow).execute(system_actor, _command())

    assert result.is_ok()
    profile = result.value
    assert profile.role == "clinic_admin"
    assert profile.email == "owner@sunrise.example"
    assert profile.login_id == "owner@sunrise.example"
    assert profile.must_change_password is True
    assert profile.is_active is True

    created = mock_uow.accounts.create.call_args.args[0]
    assert created.role == Role.clinic_admin
    assert created.created_by == system_actor.account_id
    assert verify_password("Initial1", created.password_hash)
    mock_uow.commit.assert_called()
    assert recorded_actions() == ["clinic_account_created"]


@pytest.mark.asyncio
async def test_explicit_login_id(mock_uow, system_actor):
    result = await ProvisionAccountUseCase(mock_uow).execute(
        system_actor, _command(login_id=" sunrise01 ")
    )

    assert result.value.login_id == "sunrise01"


@pytest.mark.asyncio
async def test_non_system_actor_forbidden(mock_uow, clinic_actor):
    result = await ProvisionAccountUseCase(mock_uow).execute(clinic_actor, _command())

    assert result.error.code == ErrorCode.FORBIDDEN
    mock_uow.accounts.create.assert_not_called()


@pytest.mark.asyncio
async def test_short_password(mock_uow, system_actor):
    result = await ProvisionAccountUseCase(mock_uow).execute(
        system_actor, _command(password="12345")
    )

    assert result.error.code == ErrorCode.VALIDATION_FAILED


@pytest.mark.asyncio
async def test_duplicate_email(mock_uow, system_actor, make_account):
    mock_uow.accounts.get_by_email.return_value = make_account()

    result = await ProvisionAccountUseCase(mock_uow).execute(system_actor, _command())

    assert result.error.code == ErrorCode.DUPLICATE_IDENTITY
    mock_uow.accounts.create.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_login_id(mock_uow, system_actor, make_account):
    mock_uow.accounts.get_by_login_id.return_value = make_account()

    result = await ProvisionAccountUseCase(mock_uow).execute(
        system_actor, _command(login_id="taken")
    )

    assert result.error.code == ErrorCode.DUPLICATE_IDENTITY


@pytest.mark.asyncio
async def test_constraint_race_maps_to_duplicate(mock_uow, system_actor):
    mock_uow.accounts.create = AsyncMock(side_effect=DuplicateIdentityError("UNIQUE"))

    result = await ProvisionAccountUseCase(mock_uow).execute(system_actor, _command())

    assert result.error.code == ErrorCode.DUPLICATE_IDENTITY
    mock_uow.rollback.assert_called_once()
