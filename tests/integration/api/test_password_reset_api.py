import re
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utcnow
from src.domain.entities import Account, AuditLogEntry
from tests.fixtures.accounts import fetch_account, seed_account

RESET_LINK = re.compile(r"http://frontend\.test/reset-password/([A-Za-z0-9_\-]+)")


async def _request_token(client, email_sender, email) -> str:
    response = await client.post("/auth/forgot-password", json={"email": email})
    assert response.status_code == 200
    match = RESET_LINK.search(email_sender.sent[-1]["html_body"])
    return match.group(1)


@pytest.mark.asyncio
async def test_unknown_email_creates_nothing(client: AsyncClient, db_session, email_sender):
    response = await client.post("/auth/forgot-password", json={"email": "unknown@x.com"})

    assert response.status_code == 200
    assert response.json() == {
        "status": "sent",
        "message": "If the email exists, a password reset link has been sent",
    }
    assert email_sender.sent == []
    tokens = await db_session.exec(select(Account).where(Account.reset_token_hash.is_not(None)))
    assert tokens.all() == []
    entries = await db_session.exec(select(AuditLogEntry))
    assert entries.all() == []


@pytest.mark.asyncio
async def test_reset_flow_and_single_use(client: AsyncClient, db_session, email_sender):
    clinic = await seed_account(db_session, "clinic@example.com", password="OldPass1")

    token = await _request_token(client, email_sender, "clinic@example.com")
    account = await fetch_account(db_session, clinic.id)
    assert account.reset_token_hash is not None
    assert account.reset_token_hash != token

    first = await client.put(f"/auth/reset-password/{token}", json={"password": "NewPass1"})
    assert first.status_code == 200
    assert first.json()["token"]
    assert first.json()["user"]["must_change_password"] is False

    second = await client.put(f"/auth/reset-password/{token}", json={"password": "Another1"})
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"

    login = await client.post("/auth/login", json={"email": "clinic@example.com", "password": "NewPass1"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_expired_token_never_verifies(client: AsyncClient, db_session, email_sender):
    clinic = await seed_account(db_session, "clinic@example.com", password="OldPass1")
    token = await _request_token(client, email_sender, "clinic@example.com")

    account = await fetch_account(db_session, clinic.id)
    account.reset_token_expires_at = utcnow() - timedelta(minutes=1)
    db_session.add(account)
    await db_session.commit()

    expired = await client.put(f"/auth/reset-password/{token}", json={"password": "NewPass1"})
    retried = await client.put(f"/auth/reset-password/{token}", json={"password": "NewPass1"})

    assert expired.status_code == 400
    assert retried.status_code == 400
    account = await fetch_account(db_session, clinic.id)
    assert account.reset_token_hash is None


@pytest.mark.asyncio
async def test_newer_request_replaces_older_token(client: AsyncClient, db_session, email_sender):
    await seed_account(db_session, "clinic@example.com")
    first = await _request_token(client, email_sender, "clinic@example.com")
    second = await _request_token(client, email_sender, "clinic@example.com")

    stale = await client.put(f"/auth/reset-password/{first}", json={"password": "NewPass1"})
    fresh = await client.put(f"/auth/reset-password/{second}", json={"password": "NewPass1"})

    assert stale.status_code == 400
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_delivery_failure_is_service_unavailable(
    client: AsyncClient, db_session, email_sender
):
    clinic = await seed_account(db_session, "clinic@example.com")
    email_sender.fail = True

    response = await client.post("/auth/forgot-password", json={"email": "clinic@example.com"})

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "EMAIL_DELIVERY_FAILED"
    account = await fetch_account(db_session, clinic.id)
    assert account.reset_token_hash is None


@pytest.mark.asyncio
async def test_delivery_failure_exposes_token_when_enabled(
    client: AsyncClient, db_session, email_sender, restore_config
):
    await seed_account(db_session, "clinic@example.com")
    email_sender.fail = True
    restore_config.EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE = True

    response = await client.post("/auth/forgot-password", json={"email": "clinic@example.com"})

    assert response.status_code == 200
    data = response.json()
    assert data["reset_url"].endswith(data["reset_token"])

    reset = await client.put(f"/auth/reset-password/{data['reset_token']}", json={"password": "NewPass1"})
    assert reset.status_code == 200


@pytest.mark.asyncio
async def test_short_password_rejected(client: AsyncClient):
    response = await client.put("/auth/reset-password/anything", json={"password": "123"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_password_over_bcrypt_limit_rejected(client: AsyncClient, db_session, email_sender):
    await seed_account(db_session, "clinic@example.com", password="OldPass1")
    token = await _request_token(client, email_sender, "clinic@example.com")

    response = await client.put(f"/auth/reset-password/{token}", json={"password": "é" * 40})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"
    retry = await client.put(f"/auth/reset-password/{token}", json={"password": "NewPass1"})
    assert retry.status_code == 200
