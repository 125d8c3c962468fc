from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.app.repositories.external_identity_repository import IExternalIdentityRepository
from src.app.repositories.facility_repository import IFacilityRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    external_identities: IExternalIdentityRepository
    audit_logs: IAuditLogRepository
    facilities: IFacilityRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
