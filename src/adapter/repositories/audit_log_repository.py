from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.domain.entities import AuditLogEntry


def _filters(
    target_user_id: Optional[UUID],
    target_internal_id: Optional[UUID],
    action: Optional[str],
) -> list:
    conditions = []
    if target_user_id:
        conditions.append(AuditLogEntry.target_user_id == target_user_id)
    if target_internal_id:
        conditions.append(AuditLogEntry.target_internal_id == target_internal_id)
    if action:
        conditions.append(AuditLogEntry.action == action)
    return conditions


class AuditLogRepository(IAuditLogRepository):
    """AuditLogEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an audit entry (never updated afterwards)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def list(
        self,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
        limit: int = 20,
    ) -> List[AuditLogEntry]:
        """List entries matching all given filters, newest first"""
        stmt = select(AuditLogEntry).where(
            *_filters(target_user_id, target_internal_id, action)
        )
        stmt = stmt.order_by(AuditLogEntry.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_matching(
        self,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
    ) -> int:
        """Delete entries matching all given filters, returning the count"""
        conditions = _filters(target_user_id, target_internal_id, action)
        if not conditions:
            return 0
        result = await self.session.exec(delete(AuditLogEntry).where(*conditions))
        return result.rowcount or 0

    async def delete_for_target(self, target_user_id: UUID, target_internal_id: UUID) -> int:
        """Delete every entry about an account (by id or internal id)"""
        stmt = delete(AuditLogEntry).where(
            or_(
                AuditLogEntry.target_user_id == target_user_id,
                AuditLogEntry.target_internal_id == target_internal_id,
            )
        )
        result = await self.session.exec(stmt)
        return result.rowcount or 0
