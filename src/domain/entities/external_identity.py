"""
ExternalIdentity Entity

Links an OAuth provider account to a local Account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import OAuthProvider


class ExternalIdentity(SQLModel, table=True):
    """
    ExternalIdentity entity - (provider, provider_user_id) bound to an account.

    Business Rules:
    - (provider, provider_user_id) is unique process-wide
    - An account may hold at most one identity per provider
    - Removed together with the account on permanent deletion
    """

    __tablename__ = "external_identities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    provider: OAuthProvider = Field(nullable=False)
    provider_user_id: str = Field(max_length=255, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "idx_external_identity_provider_user",
            "provider",
            "provider_user_id",
            unique=True,
        ),
        Index("idx_external_identity_account_provider", "account_id", "provider", unique=True),
    )
