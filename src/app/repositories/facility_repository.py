from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Facility
from src.domain.policy import AccessScope


class IFacilityRepository(ABC):
    """Facility repository interface - application layer"""

    @abstractmethod
    async def list(self, scope: AccessScope, name: Optional[str] = None) -> List[Facility]:
        """List facilities visible under scope, ordered by name"""
        pass

    @abstractmethod
    async def get_by_id(self, facility_id: UUID) -> Optional[Facility]:
        """Get facility by ID"""
        pass

    @abstractmethod
    async def create(self, facility: Facility) -> Facility:
        """Create a new facility"""
        pass

    @abstractmethod
    async def update(self, facility: Facility) -> Facility:
        """Update existing facility"""
        pass

    @abstractmethod
    async def delete(self, facility: Facility) -> None:
        """Remove a facility"""
        pass
