import pytest
from httpx import AsyncClient

from src.api.utils.jwt import resolve_account_id
from src.domain.entities import AccountState, Role
from tests.fixtures.accounts import (
    fetch_account,
    fetch_audit_actions,
    fetch_audit_meta,
    seed_account,
)


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_provisioned_account_logs_in_and_must_change_password(
    client: AsyncClient, system_admin
):
    """Provision a clinic_admin, then sign in with the initial password.

    Given a system administrator
    When they provision a@x.com with password secret1
    And a@x.com signs in with that password
    Then login succeeds with a session token
    And the profile says the password must be changed
    """
    response = await client.post(
        "/auth/register",
        json={"name": "Clinic A", "email": "a@x.com", "password": "secret1"},
        headers=system_admin.headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["role"] == "clinic_admin"
    assert created["login_id"] == "a@x.com"
    assert "password_hash" not in created

    response = await client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["must_change_password"] is True
    assert data["user"]["id"] == created["id"]
    assert str(resolve_account_id(data["token"])) == created["id"]


@pytest.mark.asyncio
async def test_login_by_login_id(client: AsyncClient, system_admin):
    response = await client.post("/auth/login", json={"login_id": "root", "password": "RootPass1"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "system_admin"


@pytest.mark.asyncio
async def test_login_records_bookkeeping_and_audit(client: AsyncClient, db_session, system_admin):
    response = await client.post(
        "/auth/login",
        json={"email": "ROOT@example.com", "password": "RootPass1"},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "front-desk"},
    )
    assert response.status_code == 200

    account = await fetch_account(db_session, system_admin.id)
    assert account.last_login_at is not None
    assert account.last_login_ip == "203.0.113.7"
    assert await fetch_audit_actions(db_session, system_admin.id) == ["login_success"]
    assert await fetch_audit_meta(db_session, system_admin.id, "login_success") == {
        "login_id": "root",
        "email": "root@example.com",
        "ip": "203.0.113.7",
        "user_agent": "front-desk",
    }


@pytest.mark.asyncio
async def test_invalid_credentials(client: AsyncClient, system_admin):
    wrong = await client.post("/auth/login", json={"email": "root@example.com", "password": "nope!!"})
    unknown = await client.post("/auth/login", json={"email": "who@example.com", "password": "nope!!"})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert wrong.json() == unknown.json()


@pytest.mark.asyncio
async def test_suspension_blocks_login_and_existing_token(
    client: AsyncClient, db_session, system_admin
):
    """Suspending an account stops new logins and rejects its outstanding token.

    The token itself still decodes; the account state is checked per request.
    """
    clinic = await seed_account(db_session, "clinic@example.com")

    response = await client.get("/auth/me", headers=clinic.headers)
    assert response.status_code == 200

    response = await client.patch(
        f"/admin/accounts/{clinic.id}/status",
        json={"is_active": False},
        headers=system_admin.headers,
    )
    assert response.status_code == 200
    assert response.json()["state"] == "suspended"

    login = await client.post(
        "/auth/login", json={"email": "clinic@example.com", "password": "Secret123"}
    )
    assert login.status_code == 401
    assert login.json()["error"]["code"] == "ACCOUNT_INACTIVE"

    assert resolve_account_id(clinic.token) == clinic.id
    me = await client.get("/auth/me", headers=clinic.headers)
    assert me.status_code == 401
    assert me.json()["error"]["code"] == "ACCOUNT_INACTIVE"


@pytest.mark.asyncio
async def test_missing_or_bad_token(client: AsyncClient):
    missing = await client.get("/auth/me")
    bad = await client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHENTICATED"
    assert bad.status_code == 401
    assert bad.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_register_requires_system_admin(client: AsyncClient, db_session):
    clinic = await seed_account(db_session, "clinic@example.com")

    response = await client.post(
        "/auth/register",
        json={"name": "Other", "email": "other@example.com", "password": "secret1"},
        headers=clinic.headers,
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_register_duplicate_identity(client: AsyncClient, db_session, system_admin):
    await seed_account(db_session, "taken@example.com", login_id="taken01")

    same_email = await client.post(
        "/auth/register",
        json={"name": "Dup", "email": "Taken@Example.com", "password": "secret1"},
        headers=system_admin.headers,
    )
    same_login = await client.post(
        "/auth/register",
        json={"name": "Dup", "email": "new@example.com", "password": "secret1", "login_id": "taken01"},
        headers=system_admin.headers,
    )

    assert same_email.status_code == 409
    assert same_email.json()["error"]["code"] == "DUPLICATE_IDENTITY"
    assert same_login.status_code == 409


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient, system_admin):
    response = await client.post(
        "/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "12345"},
        headers=system_admin.headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_register_password_over_bcrypt_limit(client: AsyncClient, system_admin):
    response = await client.post(
        "/auth/register",
        json={"name": "Long", "email": "long@example.com", "password": "p" * 100},
        headers=system_admin.headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_internal_ids_are_distinct(client: AsyncClient, system_admin):
    ids = set()
    for email in ("one@example.com", "two@example.com"):
        response = await client.post(
            "/auth/register",
            json={"name": email, "email": email, "password": "secret1"},
            headers=system_admin.headers,
        )
        ids.add(response.json()["internal_id"])

    assert len(ids) == 2


@pytest.mark.asyncio
async def test_deleted_account_cannot_login(client: AsyncClient, db_session):
    await seed_account(db_session, "gone@example.com", state=AccountState.deleted, role=Role.staff)

    response = await client.post(
        "/auth/login", json={"email": "gone@example.com", "password": "Secret123"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"
