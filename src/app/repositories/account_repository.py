from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account, Role


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_login_id(self, login_id: str) -> Optional[Account]:
        """Get account by login ID (case-sensitive)"""
        pass

    @abstractmethod
    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[Account]:
        """Get account holding the given password reset token hash"""
        pass

    @abstractmethod
    async def list(self, roles: Optional[List[Role]] = None) -> List[Account]:
        """List accounts ordered by name, optionally restricted to roles"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass

    @abstractmethod
    async def delete(self, account: Account) -> None:
        """Physically remove an account"""
        pass
