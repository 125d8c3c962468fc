import pytest
from httpx import AsyncClient

from src.domain.entities import AuditLogEntry
from tests.fixtures.accounts import seed_account


async def _seed_entries(db_session, actor_id, target_id, count):
    for i in range(count):
        db_session.add(
            AuditLogEntry(
                actor_role="system_admin",
                actor_id=actor_id,
                action="profile_updated",
                target_user_id=target_id,
                meta={"n": i},
            )
        )
    await db_session.commit()


@pytest.mark.asyncio
async def test_list_defaults_and_filters(client: AsyncClient, db_session, system_admin):
    clinic = await seed_account(db_session, "clinic@example.com")
    await _seed_entries(db_session, system_admin.id, clinic.id, 25)

    default = await client.get("/audit-logs", headers=system_admin.headers)
    filtered = await client.get(
        f"/audit-logs?target_user_id={clinic.id}&action=profile_updated&limit=5",
        headers=system_admin.headers,
    )

    assert default.status_code == 200
    assert default.json()["count"] == 20
    data = filtered.json()["data"]
    assert len(data) == 5
    assert all(item["target_user_id"] == str(clinic.id) for item in data)
    timestamps = [item["created_at"] for item in data]
    assert timestamps == sorted(timestamps, reverse=True)


@pytest.mark.asyncio
async def test_purge_requires_target(client: AsyncClient, system_admin):
    response = await client.delete("/audit-logs?action=login_success", headers=system_admin.headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_purge_by_target(client: AsyncClient, db_session, system_admin):
    clinic = await seed_account(db_session, "clinic@example.com")
    await _seed_entries(db_session, system_admin.id, clinic.id, 3)

    response = await client.delete(
        f"/audit-logs?target_user_id={clinic.id}", headers=system_admin.headers
    )

    assert response.status_code == 200
    assert response.json() == {"deleted_count": 3}
    remaining = await client.get(
        f"/audit-logs?target_user_id={clinic.id}", headers=system_admin.headers
    )
    assert remaining.json()["count"] == 0


@pytest.mark.asyncio
async def test_audit_log_forbidden_for_clinic_admin(client: AsyncClient, db_session):
    clinic = await seed_account(db_session, "clinic@example.com")

    response = await client.get("/audit-logs", headers=clinic.headers)

    assert response.status_code == 403
