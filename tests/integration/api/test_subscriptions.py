from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from congregation.domain.entities import UserRole


def _billing_payload(user_id, **fields):
    start = datetime.utcnow()
    payload = {
        "billing_subscription_id": "sub_12345",
        "user_id": str(user_id),
        "tier": "premium",
        "status": "active",
        "current_period_start": start.isoformat(),
        "current_period_end": (start + timedelta(days=30)).isoformat(),
    }
    payload.update(fields)
    return payload


@pytest.mark.asyncio
async def test_billing_sync_activates_subscription(client: AsyncClient, create_user, admin_headers):
    """Billing Sync

    Given a free user
    When the billing provider reports an active premium subscription
    Then the user's profile shows the premium tier
    And their subscription status lists it
    """
    user, headers = await create_user()

    synced = await client.post(
        "/api/subscriptions/billing-sync", json=_billing_payload(user.id), headers=admin_headers
    )

    assert synced.status_code == 200
    assert synced.json()["tier"] == "premium"

    me = await client.get("/api/users/me", headers=headers)
    assert me.json()["subscription_tier"] == "premium"

    status = await client.get("/api/subscriptions/me", headers=headers)
    assert status.json()["has_subscription"] is True
    assert status.json()["tier"] == "premium"
    assert status.json()["status"] == "active"


@pytest.mark.asyncio
async def test_billing_sync_expiry_drops_to_free(client: AsyncClient, create_user, admin_headers):
    user, headers = await create_user()
    await client.post(
        "/api/subscriptions/billing-sync", json=_billing_payload(user.id), headers=admin_headers
    )

    await client.post(
        "/api/subscriptions/billing-sync",
        json=_billing_payload(user.id, status="expired"),
        headers=admin_headers,
    )

    me = await client.get("/api/users/me", headers=headers)
    assert me.json()["subscription_tier"] == "free"
    status = await client.get("/api/subscriptions/me", headers=headers)
    assert status.json() == {
        "has_subscription": False,
        "tier": "free",
        "status": None,
        "current_period_end": None,
    }


@pytest.mark.asyncio
async def test_billing_sync_requires_admin_key(client: AsyncClient, create_user):
    user, _ = await create_user()

    missing = await client.post("/api/subscriptions/billing-sync", json=_billing_payload(user.id))
    wrong = await client.post(
        "/api/subscriptions/billing-sync",
        json=_billing_payload(user.id),
        headers={"X-Admin-API-Key": "not-the-key"},
    )

    assert missing.status_code == 401
    assert missing.json()["error"]["message"] == "Admin API key required"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["message"] == "Invalid admin API key"


@pytest.mark.asyncio
async def test_billing_sync_unknown_user(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/subscriptions/billing-sync",
        json=_billing_payload("00000000-0000-0000-0000-000000000000"),
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_own_subscription(client: AsyncClient, create_user, admin_headers):
    """Cancelling keeps the paid tier until the billing provider reports expiry"""
    user, headers = await create_user()
    subscription_id = (await client.post(
        "/api/subscriptions/billing-sync", json=_billing_payload(user.id), headers=admin_headers
    )).json()["subscription_id"]

    response = await client.post(
        f"/api/subscriptions/{subscription_id}/cancel",
        json={"reason": "Too expensive"},
        headers=headers,
    )

    assert response.status_code == 200
    me = await client.get("/api/users/me", headers=headers)
    assert me.json()["subscription_tier"] == "premium"
    assert me.json()["subscription_status"] == "cancelled"


@pytest.mark.asyncio
async def test_cannot_cancel_someone_elses_subscription(
    client: AsyncClient, create_user, admin_headers
):
    owner, _ = await create_user()
    _, other_headers = await create_user()
    subscription_id = (await client.post(
        "/api/subscriptions/billing-sync", json=_billing_payload(owner.id), headers=admin_headers
    )).json()["subscription_id"]

    response = await client.post(
        f"/api/subscriptions/{subscription_id}/cancel", json={}, headers=other_headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Not your subscription"


@pytest.mark.asyncio
async def test_super_admin_lists_redacted_subscriptions(
    client: AsyncClient, create_user, admin_headers
):
    owner, _ = await create_user()
    await client.post(
        "/api/subscriptions/billing-sync", json=_billing_payload(owner.id), headers=admin_headers
    )
    _, admin_user_headers = await create_user(UserRole.super_admin)

    response = await client.get("/api/subscriptions", headers=admin_user_headers)

    assert response.status_code == 200
    subscriptions = response.json()["subscriptions"]
    assert len(subscriptions) == 1
    assert subscriptions[0]["user_id"] == "[REDACTED]"
    assert subscriptions[0]["tier"] == "premium"


@pytest.mark.asyncio
async def test_pastor_cannot_list_subscriptions(client: AsyncClient, church):
    response = await client.get("/api/subscriptions", headers=church["pastor_headers"])

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_status_of_existing_subscription(client: AsyncClient, create_user, admin_headers):
    user, headers = await create_user()
    payload = _billing_payload(user.id, tier="basic")
    await client.post("/api/subscriptions/billing-sync", json=payload, headers=admin_headers)

    response = await client.get("/api/subscriptions/me", headers=headers)

    assert response.status_code == 200
    status = response.json()
    assert status["has_subscription"] is True
    assert status["tier"] == "basic"
    assert status["status"] == "active"
    assert status["current_period_end"].startswith(payload["current_period_end"][:16])
