from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuditLogEntry


class IAuditLogRepository(ABC):
    """AuditLogEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an audit entry (never updated afterwards)"""
        pass

    @abstractmethod
    async def list(
        self,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
        limit: int = 20,
    ) -> List[AuditLogEntry]:
        """List entries matching all given filters, newest first"""
        pass

    @abstractmethod
    async def delete_matching(
        self,
        target_user_id: Optional[UUID] = None,
        target_internal_id: Optional[UUID] = None,
        action: Optional[str] = None,
    ) -> int:
        """Delete entries matching all given filters, returning the count"""
        pass

    @abstractmethod
    async def delete_for_target(self, target_user_id: UUID, target_internal_id: UUID) -> int:
        """Delete every entry about an account (by id or internal id)"""
        pass
