"""
Account Use Case DTOs (Data Transfer Objects)

Command and Response classes for the account domain. Responses are built
from a freshly committed Account before any further session work, so they
never hold a reference to a live ORM instance.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Account, Role


# ============================================================================
# Command DTOs
# ============================================================================


class ProvisionAccountCommand(BaseModel):
    """Command to provision a clinic account"""

    name: str
    email: str
    password: str
    login_id: Optional[str] = None


class UpdateProfileCommand(BaseModel):
    """Command to update the caller's own profile; absent fields are untouched"""

    name: Optional[str] = None
    email: Optional[str] = None
    login_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[Role] = None
    old_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccountProfile(BaseModel):
    """Public view of an account; never carries credential material"""

    id: str
    internal_id: str
    name: str
    email: str
    login_id: str
    role: str
    state: str
    is_active: bool
    must_change_password: bool
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None
    deleted_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            id=str(account.id),
            internal_id=str(account.internal_id),
            name=account.name,
            email=account.email,
            login_id=account.login_id,
            role=account.role.value,
            state=account.state.value,
            is_active=account.is_active,
            must_change_password=account.must_change_password,
            phone=account.phone,
            address=account.address,
            avatar=account.avatar,
            deleted_at=account.deleted_at,
            last_login_at=account.last_login_at,
            created_at=account.created_at,
        )


class ListAccountsResponse(BaseModel):
    """Response for list accounts use case"""

    count: int
    data: List[AccountProfile]


class ReissuePasswordResponse(BaseModel):
    """Response for reissue password use case; the password is shown once"""

    temporary_password: str
    account: AccountProfile


class HardDeleteAccountResponse(BaseModel):
    """Response for permanent account deletion"""

    status: str
    account_id: str
    identities_deleted: int
    audit_entries_deleted: int
