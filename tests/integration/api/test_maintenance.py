from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from congregation.domain.entities import AuditEntry, AuditResult, RateLimitRecord, User


@pytest.mark.asyncio
async def test_maintenance_requires_admin_key(client: AsyncClient):
    response = await client.post("/api/maintenance/rate-limits/sweep")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_sweep_idle_rate_limits(client: AsyncClient, session_factory, admin_headers):
    """Only records idle past the retention window are removed"""
    async with session_factory() as session:
        session.add(RateLimitRecord(
            key="rateLimit_old_signup",
            subject="old",
            operation="signup",
            updated_at=datetime.utcnow() - timedelta(days=3),
        ))
        session.add(RateLimitRecord(key="rateLimit_new_signup", subject="new", operation="signup"))
        await session.commit()

    response = await client.post(
        "/api/maintenance/rate-limits/sweep",
        params={"older_than_hours": 24},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"deleted": 1}
    async with session_factory() as session:
        keys = (await session.exec(select(RateLimitRecord.key))).all()
    assert keys == ["rateLimit_new_signup"]


@pytest.mark.asyncio
async def test_sweep_audit_entries_in_batches(client: AsyncClient, session_factory, admin_headers):
    old = datetime.utcnow() - timedelta(days=400)
    async with session_factory() as session:
        for _ in range(3):
            session.add(AuditEntry(
                action="READ", collection="prayers", result=AuditResult.SUCCESS, created_at=old
            ))
        await session.commit()

    first = await client.post(
        "/api/maintenance/audit/sweep",
        params={"older_than_days": 365, "batch_size": 2},
        headers=admin_headers,
    )
    second = await client.post(
        "/api/maintenance/audit/sweep",
        params={"older_than_days": 365, "batch_size": 2},
        headers=admin_headers,
    )

    assert first.json() == {"deleted": 2}
    assert second.json() == {"deleted": 1}


@pytest.mark.asyncio
async def test_expire_lapsed_subscriptions(
    client: AsyncClient, create_user, session_factory, admin_headers
):
    """A subscription past its period end is expired and the user drops to free"""
    user, headers = await create_user()
    start = datetime.utcnow() - timedelta(days=40)
    await client.post("/api/subscriptions/billing-sync", json={
        "billing_subscription_id": "sub_lapsed",
        "user_id": str(user.id),
        "tier": "basic",
        "status": "active",
        "current_period_start": start.isoformat(),
        "current_period_end": (start + timedelta(days=30)).isoformat(),
    }, headers=admin_headers)

    response = await client.post("/api/maintenance/subscriptions/expire", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"expired": 1}
    async with session_factory() as session:
        refreshed = await session.get(User, user.id)
    assert refreshed.subscription_tier == "free"
    assert refreshed.subscription_status == "expired"
