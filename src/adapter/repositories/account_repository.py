from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account, Role
from src.domain.errors import DuplicateIdentityError


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by (normalized) email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_login_id(self, login_id: str) -> Optional[Account]:
        """Get account by login ID (case-sensitive)"""
        stmt = select(Account).where(Account.login_id == login_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[Account]:
        """Get account holding the given password reset token hash"""
        stmt = select(Account).where(Account.reset_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, roles: Optional[List[Role]] = None) -> List[Account]:
        """List accounts ordered by name, optionally restricted to roles"""
        stmt = select(Account)
        if roles:
            stmt = stmt.where(col(Account.role).in_(roles))
        stmt = stmt.order_by(col(Account.name))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        await self._flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self._flush()
        await self.session.refresh(account)
        return account

    async def delete(self, account: Account) -> None:
        """Physically remove an account"""
        await self.session.delete(account)
        await self.session.flush()

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateIdentityError(str(exc.orig)) from exc
