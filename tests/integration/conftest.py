from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import EmailDeliveryError, IEmailSender
from src.app.services.oauth_client import IOAuthClient, OAuthExchangeError, OAuthProfile
from src.depends import get_email_sender, get_oauth_client, get_unit_of_work
from src.domain.entities import OAuthProvider, Role
from tests.fixtures.accounts import SeededAccount, seed_account


class RecordingEmailSender(IEmailSender):
    """Captures outgoing mail; set fail=True to simulate an SMTP outage."""

    def __init__(self):
        self.sent: List[Dict[str, str]] = []
        self.fail = False

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("SMTP server unavailable")
        self.sent.append({"recipient": recipient, "subject": subject, "html_body": html_body})


class FakeOAuthClient(IOAuthClient):
    """Resolves authorization codes from a preloaded table of profiles."""

    def __init__(self):
        self.configured = {OAuthProvider.google, OAuthProvider.facebook}
        self.profiles: Dict[str, OAuthProfile] = {}

    def is_configured(self, provider: OAuthProvider) -> bool:
        return provider in self.configured

    def authorization_url(self, provider: OAuthProvider, state: str) -> str:
        return f"https://{provider.value}.example/consent?state={state}"

    async def fetch_profile(self, provider: OAuthProvider, code: str) -> OAuthProfile:
        profile: Optional[OAuthProfile] = self.profiles.get(code)
        if profile is None or profile.provider != provider:
            raise OAuthExchangeError(f"unknown code {code}")
        return profile


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def oauth_client():
    return FakeOAuthClient()


@pytest_asyncio.fixture
async def client(db_session, email_sender, oauth_client):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_oauth_client] = lambda: oauth_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def system_admin(db_session) -> SeededAccount:
    return await seed_account(
        db_session, "root@example.com", password="RootPass1", role=Role.system_admin,
        login_id="root", name="Root Admin",
    )
