from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ExternalIdentity, OAuthProvider


class IExternalIdentityRepository(ABC):
    """ExternalIdentity repository interface - application layer"""

    @abstractmethod
    async def get_by_provider_user(
        self, provider: OAuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Get the identity linked to a provider account"""
        pass

    @abstractmethod
    async def list_by_account(self, account_id: UUID) -> List[ExternalIdentity]:
        """List identities linked to an account"""
        pass

    @abstractmethod
    async def create(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Link a new external identity"""
        pass

    @abstractmethod
    async def delete_by_account(self, account_id: UUID) -> int:
        """Remove all identities of an account, returning the count removed"""
        pass
