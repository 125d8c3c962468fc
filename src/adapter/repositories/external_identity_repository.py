from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.external_identity_repository import IExternalIdentityRepository
from src.domain.entities import ExternalIdentity, OAuthProvider
from src.domain.errors import DuplicateIdentityError


class ExternalIdentityRepository(IExternalIdentityRepository):
    """ExternalIdentity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_provider_user(
        self, provider: OAuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Get the identity linked to a provider account"""
        stmt = select(ExternalIdentity).where(
            ExternalIdentity.provider == provider,
            ExternalIdentity.provider_user_id == provider_user_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_account(self, account_id: UUID) -> List[ExternalIdentity]:
        """List identities linked to an account"""
        stmt = select(ExternalIdentity).where(ExternalIdentity.account_id == account_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Link a new external identity"""
        self.session.add(identity)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateIdentityError(str(exc.orig)) from exc
        await self.session.refresh(identity)
        return identity

    async def delete_by_account(self, account_id: UUID) -> int:
        """Remove all identities of an account, returning the count removed"""
        stmt = delete(ExternalIdentity).where(ExternalIdentity.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.rowcount or 0
