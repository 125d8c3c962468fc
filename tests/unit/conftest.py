from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from src.domain.credentials import hash_password
from src.domain.entities import Account, AccountState, Role
from src.domain.policy import ActorContext


def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_login_id = AsyncMock(return_value=None)
    uow.accounts.get_by_reset_token_hash = AsyncMock(return_value=None)
    uow.accounts.list = AsyncMock(return_value=[])
    uow.accounts.create = AsyncMock(side_effect=_echo)
    uow.accounts.update = AsyncMock(side_effect=_echo)
    uow.accounts.delete = AsyncMock()

    uow.external_identities = MagicMock()
    uow.external_identities.get_by_provider_user = AsyncMock(return_value=None)
    uow.external_identities.list_by_account = AsyncMock(return_value=[])
    uow.external_identities.create = AsyncMock(side_effect=_echo)
    uow.external_identities.delete_by_account = AsyncMock(return_value=0)

    uow.audit_logs = MagicMock()
    uow.audit_logs.create = AsyncMock(side_effect=_echo)
    uow.audit_logs.list = AsyncMock(return_value=[])
    uow.audit_logs.delete_matching = AsyncMock(return_value=0)
    uow.audit_logs.delete_for_target = AsyncMock(return_value=0)

    uow.facilities = MagicMock()
    uow.facilities.list = AsyncMock(return_value=[])
    uow.facilities.get_by_id = AsyncMock(return_value=None)
    uow.facilities.create = AsyncMock(side_effect=_echo)
    uow.facilities.update = AsyncMock(side_effect=_echo)
    uow.facilities.delete = AsyncMock()

    return uow


@pytest.fixture
def make_account():
    """Factory for Account entities; password is hashed when given."""

    def factory(
        role: Role = Role.clinic_admin,
        state: AccountState = AccountState.active,
        password: Optional[str] = "Secret123",
        email: str = "clinic@example.com",
        login_id: Optional[str] = None,
        name: str = "Clinic Admin",
        created_by: Optional[UUID] = None,
    ) -> Account:
        return Account(
            id=uuid4(),
            name=name,
            email=email,
            login_id=login_id or email,
            password_hash=hash_password(password) if password else None,
            role=role,
            state=state,
            created_by=created_by,
        )

    return factory


@pytest.fixture
def system_actor():
    return ActorContext(account_id=uuid4(), role=Role.system_admin, internal_id=uuid4())


@pytest.fixture
def clinic_actor():
    return ActorContext(account_id=uuid4(), role=Role.clinic_admin, internal_id=uuid4())


@pytest.fixture
def recorded_actions(mock_uow):
    """Audit actions written through the mocked audit repository, in order."""

    def actions() -> list:
        return [call.args[0].action for call in mock_uow.audit_logs.create.call_args_list]

    return actions
