from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.audit_log_repository import AuditLogRepository
from src.adapter.repositories.external_identity_repository import ExternalIdentityRepository
from src.adapter.repositories.facility_repository import FacilityRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.external_identities = ExternalIdentityRepository(self.session)
        self.audit_logs = AuditLogRepository(self.session)
        self.facilities = FacilityRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
