from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.oauth_client import HttpxOAuthClient
from src.adapter.services.smtp_email_sender import SmtpEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import resolve_account_id
from src.app.services.email_sender import IEmailSender
from src.app.services.oauth_client import IOAuthClient
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.policy import ActorContext

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class ClientInfo:
    ip: Optional[str]
    user_agent: Optional[str]


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    return SmtpEmailSender(ApplicationConfig)


def get_oauth_client() -> IOAuthClient:
    return HttpxOAuthClient(ApplicationConfig)


def get_client_info(request: Request) -> ClientInfo:
    """Client IP (first X-Forwarded-For hop when behind a proxy) and user agent"""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() or (request.client.host if request.client else None)
    return ClientInfo(ip=ip or None, user_agent=request.headers.get("user-agent"))


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ActorContext:
    """
    Dependency resolving the bearer token to the calling account.

    Tokens carry no liveness information, so the account is re-fetched and
    its lifecycle state re-checked on every request.

    Raises:
        ClientError: 401 if the token is missing, invalid or expired, or the
            account no longer exists or is not active
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error(ErrorCode.UNAUTHENTICATED, "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    account_id = resolve_account_id(credentials.credentials)
    if account_id is None:
        raise ClientError(
            Error(ErrorCode.UNAUTHENTICATED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    async with uow:
        account = await uow.accounts.get_by_id(account_id)
        if account is None:
            raise ClientError(
                Error(ErrorCode.UNAUTHENTICATED, "Account not found"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        if not account.is_active:
            raise ClientError(
                Error(ErrorCode.ACCOUNT_INACTIVE, "This account is inactive"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        return ActorContext(
            account_id=account.id, role=account.role, internal_id=account.internal_id
        )
