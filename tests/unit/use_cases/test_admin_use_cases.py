from datetime import datetime
from uuid import uuid4

import pytest

from congregation.app.use_cases.admin import (
    GetRevenueUseCase,
    GetSystemStatsUseCase,
    GetTenantContentUseCase,
    GetUserGrowthUseCase,
)
from congregation.app.use_cases.maintenance import (
    ExpireSubscriptionsUseCase,
    SweepAuditEntriesUseCase,
    SweepRateLimitsUseCase,
)
from congregation.domain.entities import (
    AuditResult,
    PrivacyCategory,
    Subscription,
    SubscriptionStatus,
    SubscriptionTier,
    UserRole,
)
from congregation.shared_kernel import error_codes

PRICING = {"basic": 9.99, "premium": 29.99}


def _subscription(tier, status=SubscriptionStatus.active, **fields) -> Subscription:
    return Subscription(
        user_id=fields.pop("user_id", uuid4()),
        tier=tier,
        status=status,
        billing_subscription_id=f"sub_{uuid4().hex[:8]}",
        **fields,
    )


@pytest.fixture
def super_admin(mock_uow, make_user):
    admin = make_user(role=UserRole.super_admin)
    mock_uow.users.get_by_id.return_value = admin
    return admin


@pytest.mark.asyncio
async def test_system_stats(mock_uow, audit, super_admin):
    # Arrange
    mock_uow.churches.count_active.return_value = 4
    mock_uow.users.count.return_value = 120
    mock_uow.subscriptions.list_by_statuses.return_value = [
        _subscription(SubscriptionTier.basic),
        _subscription(SubscriptionTier.basic),
        _subscription(SubscriptionTier.premium),
    ]

    # Act
    result = await GetSystemStatsUseCase(mock_uow, audit, PRICING).execute(super_admin.id)

    # Assert
    assert result.is_ok()
    stats = result.value
    assert stats.total_churches == 4
    assert stats.total_users == 120
    assert stats.active_subscriptions == {"basic": 2, "premium": 1}
    assert stats.monthly_revenue == 49.97


@pytest.mark.asyncio
async def test_revenue_counts_only_active_towards_mrr(mock_uow, audit, super_admin):
    # Arrange
    mock_uow.subscriptions.list_by_statuses.return_value = [
        _subscription(SubscriptionTier.basic),
        _subscription(SubscriptionTier.premium),
        _subscription(SubscriptionTier.premium),
        _subscription(SubscriptionTier.premium, SubscriptionStatus.cancelled),
    ]
    start = datetime(2030, 1, 1)
    end = datetime(2030, 12, 31)

    # Act
    result = await GetRevenueUseCase(mock_uow, audit, PRICING).execute(super_admin.id, start, end)

    # Assert
    revenue = result.value
    assert revenue.total_subscriptions == 4
    assert revenue.active_subscriptions == 3
    assert revenue.cancelled_subscriptions == 1
    assert revenue.monthly_recurring_revenue == 69.97
    assert revenue.annual_recurring_revenue == 839.64
    assert revenue.by_tier["basic"].count == 1
    assert revenue.by_tier["premium"].count == 2
    assert revenue.by_tier["premium"].mrr == 59.98
    mock_uow.subscriptions.list_by_statuses.assert_awaited_once_with(
        [SubscriptionStatus.active, SubscriptionStatus.cancelled],
        created_from=start,
        created_to=end,
    )


@pytest.mark.asyncio
async def test_revenue_denied_for_pastor(mock_uow, audit, make_user):
    pastor = make_user(role=UserRole.pastor)
    mock_uow.users.get_by_id.return_value = pastor

    result = await GetRevenueUseCase(mock_uow, audit, PRICING).execute(pastor.id)

    assert result.is_err()
    assert result.error.code == error_codes.PERMISSION_DENIED
    mock_uow.subscriptions.list_by_statuses.assert_not_called()


@pytest.mark.asyncio
async def test_user_growth_by_month(mock_uow, audit, super_admin):
    mock_uow.users.list_created_at.return_value = [
        datetime(2030, 2, 10),
        datetime(2030, 1, 5),
        datetime(2030, 2, 28),
        datetime(2030, 4, 1),
    ]

    result = await GetUserGrowthUseCase(mock_uow, audit).execute(super_admin.id)

    growth = result.value
    assert growth.total_users == 4
    assert [(m.month, m.new_users, m.total_users) for m in growth.growth_by_month] == [
        ("2030-01", 1, 1),
        ("2030-02", 2, 3),
        ("2030-04", 1, 4),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("category", list(PrivacyCategory))
async def test_tenant_content_always_denied(mock_uow, audit, super_admin, category):
    """Super admins pass the role check and are then stopped by the privacy partition"""
    church_id = uuid4()

    result = await GetTenantContentUseCase(mock_uow, audit).execute(
        super_admin.id, church_id, category
    )

    assert result.is_err()
    assert result.error.code == error_codes.PERMISSION_DENIED
    decisions = [
        (call.args[1], call.args[2]) for call in audit.record_access_decision.await_args_list
    ]
    assert decisions == [
        ("SUPER_ADMIN_ACCESS", AuditResult.SUCCESS),
        ("PRIVACY_PARTITION", AuditResult.DENIED),
    ]
    assert audit.record_access_decision.await_args_list[-1].kwargs["metadata"] == {
        "category": category,
        "requestedChurchId": church_id,
    }


@pytest.mark.asyncio
async def test_tenant_content_denied_for_pastor_at_role_check(mock_uow, audit, make_user):
    pastor = make_user(role=UserRole.pastor)
    mock_uow.users.get_by_id.return_value = pastor

    result = await GetTenantContentUseCase(mock_uow, audit).execute(
        pastor.id, uuid4(), PrivacyCategory.member_data
    )

    assert result.is_err()
    assert audit.record_access_decision.await_count == 1


@pytest.mark.asyncio
async def test_sweep_rate_limits(mock_uow):
    mock_uow.rate_limits.delete_inactive.return_value = 7

    result = await SweepRateLimitsUseCase(mock_uow).execute(older_than_hours=24)

    assert result.value.deleted == 7
    mock_uow.rate_limits.delete_inactive.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_sweep_audit_entries_is_batched(mock_uow):
    mock_uow.audit_entries.delete_older_than.return_value = 500

    result = await SweepAuditEntriesUseCase(mock_uow).execute(older_than_days=30, batch_size=500)

    assert result.value.deleted == 500
    assert mock_uow.audit_entries.delete_older_than.await_args.kwargs == {"limit": 500}


@pytest.mark.asyncio
async def test_expire_lapsed_subscriptions(mock_uow, make_user):
    # Arrange
    user = make_user(subscription_tier=SubscriptionTier.premium)
    lapsed = _subscription(
        SubscriptionTier.premium, user_id=user.id, current_period_end=datetime(2020, 1, 1)
    )
    mock_uow.subscriptions.list_lapsed.return_value = [lapsed]
    mock_uow.users.get_by_id.return_value = user

    # Act
    result = await ExpireSubscriptionsUseCase(mock_uow).execute()

    # Assert
    assert result.value.expired == 1
    assert lapsed.status == SubscriptionStatus.expired
    assert user.subscription_tier == SubscriptionTier.free
    assert user.subscription_status == SubscriptionStatus.expired
    mock_uow.commit.assert_awaited_once()
