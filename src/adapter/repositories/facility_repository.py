from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.facility_repository import IFacilityRepository
from src.domain.entities import Facility
from src.domain.policy import AccessScope


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the filter matches them literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FacilityRepository(IFacilityRepository):
    """Facility repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self, scope: AccessScope, name: Optional[str] = None) -> List[Facility]:
        """List facilities visible under scope, ordered by name"""
        stmt = select(Facility)
        if not scope.unrestricted:
            stmt = stmt.where(Facility.created_by == scope.owner_id)
        if name:
            stmt = stmt.where(col(Facility.name).ilike(f"%{_escape_like(name)}%", escape="\\"))
        stmt = stmt.order_by(col(Facility.name))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, facility_id: UUID) -> Optional[Facility]:
        """Get facility by ID"""
        stmt = select(Facility).where(Facility.id == facility_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, facility: Facility) -> Facility:
        """Create a new facility"""
        self.session.add(facility)
        await self.session.flush()
        await self.session.refresh(facility)
        return facility

    async def update(self, facility: Facility) -> Facility:
        """Update existing facility"""
        self.session.add(facility)
        await self.session.flush()
        await self.session.refresh(facility)
        return facility

    async def delete(self, facility: Facility) -> None:
        """Remove a facility"""
        await self.session.delete(facility)
        await self.session.flush()
