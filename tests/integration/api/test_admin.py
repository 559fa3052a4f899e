import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from congregation.domain.entities import AuditEntry, AuditResult, UserRole


@pytest.mark.asyncio
async def test_system_stats(client: AsyncClient, church, create_user, admin_headers):
    """System Stats

    Given a church with a pastor and a member, and one premium subscriber
    When a super admin requests system stats
    Then only aggregate counts and revenue are returned
    """
    _, headers = await create_user(UserRole.super_admin)
    await client.post("/api/subscriptions/billing-sync", json={
        "billing_subscription_id": "sub_stats",
        "user_id": str(church["member"].id),
        "tier": "premium",
        "status": "active",
    }, headers=admin_headers)

    response = await client.get("/api/admin/stats", headers=headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["total_churches"] == 1
    assert stats["total_users"] == 3
    assert stats["active_subscriptions"] == {"basic": 0, "premium": 1}
    assert stats["monthly_revenue"] == ApplicationConfig.SUBSCRIPTION_PRICING["premium"]


@pytest.mark.asyncio
async def test_pastor_cannot_read_stats(client: AsyncClient, church):
    response = await client.get("/api/admin/stats", headers=church["pastor_headers"])

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_church_list_is_aggregate(client: AsyncClient, church, create_user):
    _, headers = await create_user(UserRole.super_admin)

    response = await client.get("/api/admin/churches", headers=headers)

    assert response.status_code == 200
    churches = response.json()["churches"]
    assert len(churches) == 1
    assert churches[0]["name"] == "Grace Chapel"
    assert churches[0]["member_count"] == 2
    assert "description" not in churches[0]


@pytest.mark.asyncio
async def test_revenue_and_user_growth(client: AsyncClient, church, create_user):
    _, headers = await create_user(UserRole.super_admin)

    revenue = await client.get("/api/admin/revenue", headers=headers)
    growth = await client.get("/api/admin/user-growth", headers=headers)

    assert revenue.status_code == 200
    assert revenue.json()["monthly_recurring_revenue"] == 0
    assert growth.status_code == 200
    assert growth.json()["total_users"] == 3
    assert sum(m["new_users"] for m in growth.json()["growth_by_month"]) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["activities", "members", "sermons"])
async def test_tenant_content_refused_to_super_admin(
    client: AsyncClient, church, create_user, session_factory, content
):
    """Privacy Partition

    Given I am a super admin
    When I request a church's private content
    Then I am refused with 403
    And the refusal is recorded in the audit trail
    """
    admin, headers = await create_user(UserRole.super_admin)

    response = await client.get(
        f"/api/admin/churches/{church['church_id']}/{content}", headers=headers
    )

    assert response.status_code == 403
    assert "privacy compliance" in response.json()["error"]["message"]

    async with session_factory() as session:
        entries = (await session.exec(
            select(AuditEntry).where(AuditEntry.user_id == admin.id)
        )).all()
    assert {(e.action, e.result) for e in entries} == {
        ("SUPER_ADMIN_ACCESS", AuditResult.SUCCESS),
        ("PRIVACY_PARTITION", AuditResult.DENIED),
    }


@pytest.mark.asyncio
async def test_stats_and_revenue_with_active_subscriptions(
    client: AsyncClient, church, create_user, admin_headers
):
    """Given one basic and one premium subscriber, stats and revenue count both tiers"""
    _, headers = await create_user(UserRole.super_admin)
    for user, tier in ((church["member"], "basic"), (church["pastor"], "premium")):
        synced = await client.post("/api/subscriptions/billing-sync", json={
            "billing_subscription_id": f"sub_{tier}",
            "user_id": str(user.id),
            "tier": tier,
            "status": "active",
        }, headers=admin_headers)
        assert synced.status_code == 200, synced.text

    stats = await client.get("/api/admin/stats", headers=headers)
    revenue = await client.get("/api/admin/revenue", headers=headers)

    pricing = ApplicationConfig.SUBSCRIPTION_PRICING
    expected_mrr = round(pricing["basic"] + pricing["premium"], 2)
    assert stats.status_code == 200
    assert stats.json()["active_subscriptions"] == {"basic": 1, "premium": 1}
    assert stats.json()["monthly_revenue"] == pytest.approx(expected_mrr)
    assert revenue.status_code == 200
    data = revenue.json()
    assert data["total_subscriptions"] == 2
    assert data["active_subscriptions"] == 2
    assert data["monthly_recurring_revenue"] == pytest.approx(expected_mrr)
    assert data["by_tier"]["basic"] == {"count": 1, "mrr": pricing["basic"]}
    assert data["by_tier"]["premium"]["count"] == 1
