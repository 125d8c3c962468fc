"""
Account Use Cases

Provisioning, self-service profile and administrative lifecycle of accounts.
"""

from .provision_account_use_case import ProvisionAccountUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .get_profile_use_case import GetProfileUseCase
from .list_accounts_use_case import ListAccountsUseCase, parse_role_filter
from .set_account_status_use_case import SetAccountStatusUseCase
from .soft_delete_account_use_case import SoftDeleteAccountUseCase
from .hard_delete_account_use_case import HardDeleteAccountUseCase
from .reissue_password_use_case import ReissuePasswordUseCase
from .dtos import (
    AccountProfile,
    HardDeleteAccountResponse,
    ListAccountsResponse,
    ProvisionAccountCommand,
    ReissuePasswordResponse,
    UpdateProfileCommand,
)

__all__ = [
    # Use Cases
    "ProvisionAccountUseCase",
    "UpdateProfileUseCase",
    "GetProfileUseCase",
    "ListAccountsUseCase",
    "SetAccountStatusUseCase",
    "SoftDeleteAccountUseCase",
    "HardDeleteAccountUseCase",
    "ReissuePasswordUseCase",
    "parse_role_filter",
    # DTOs - Commands
    "ProvisionAccountCommand",
    "UpdateProfileCommand",
    # DTOs - Responses
    "AccountProfile",
    "ListAccountsResponse",
    "ReissuePasswordResponse",
    "HardDeleteAccountResponse",
]
