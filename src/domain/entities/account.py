"""
Account Entity

The user/account aggregate: identity, role, lifecycle state and credentials.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import AccountState, CredentialState, Role


class Account(SQLModel, table=True):
    """
    Account entity - a person who can sign in to the clinic system.

    Business Rules:
    - internal_id is generated once and never mutated; audit records use it
      so history survives login/email changes
    - email is unique and stored lower-cased; login_id is unique,
      case-sensitive and defaults to the email
    - password_hash is absent for OAuth-only accounts
    - state is the single source of lifecycle truth; is_active/is_deleted
      are derived from it
    - permanent deletion requires state=deleted
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    internal_id: UUID = Field(default_factory=uuid4, unique=True, index=True)

    login_id: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)

    password_hash: Optional[str] = Field(default=None, max_length=60)

    role: Role = Field(default=Role.staff)
    state: AccountState = Field(default=AccountState.active)
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    must_change_password: bool = Field(default=False)

    # Password reset (SHA-256 of the emailed token)
    reset_token_hash: Optional[str] = Field(default=None, index=True, max_length=64)
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_ip: Optional[str] = Field(default=None, max_length=64)

    avatar: Optional[str] = Field(default=None, max_length=1024)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)

    # Provisioning admin, or tenant owner for tenant-scoped accounts
    created_by: Optional[UUID] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_account_state", "state"),
        Index("idx_account_role", "role"),
    )

    @property
    def is_active(self) -> bool:
        return self.state == AccountState.active

    @property
    def is_deleted(self) -> bool:
        return self.state == AccountState.deleted

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def credential_state(self, linked_identities: int) -> Optional[CredentialState]:
        """Classify how the account can authenticate given its linked identity count."""
        if self.has_password and linked_identities:
            return CredentialState.both
        if self.has_password:
            return CredentialState.password
        if linked_identities:
            return CredentialState.oauth_only
        return None

    def mark_suspended(self) -> None:
        self.state = AccountState.suspended
        self.updated_at = utcnow()

    def mark_active(self) -> None:
        self.state = AccountState.active
        self.deleted_at = None
        self.updated_at = utcnow()

    def mark_deleted(self) -> None:
        self.state = AccountState.deleted
        self.deleted_at = utcnow()
        self.clear_reset_token()
        self.updated_at = utcnow()

    def clear_reset_token(self) -> None:
        self.reset_token_hash = None
        self.reset_token_expires_at = None


def normalize_email(email: str) -> str:
    return email.strip().lower()
