from typing import Mapping
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction, SubscriptionStatus, SubscriptionTier
from congregation.shared_kernel.result import Result, Return
from .dtos import SystemStatsResponse
from .pricing import monthly_price


class GetSystemStatsUseCase:
    """
    Platform-wide counters for super admins.

    Returns:
        Active church count, user count, active subscriptions per paid tier
        and the monthly revenue they add up to
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, pricing: Mapping[str, float]):
        self.uow = uow
        self.audit = audit
        self.pricing = pricing

    async def execute(self, user_id: UUID) -> Result[SystemStatsResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            total_churches = await self.uow.churches.count_active()
            total_users = await self.uow.users.count()
            active = await self.uow.subscriptions.list_by_statuses([SubscriptionStatus.active])

            by_tier = {SubscriptionTier.basic.value: 0, SubscriptionTier.premium.value: 0}
            revenue = 0.0
            for subscription in active:
                if subscription.tier.value in by_tier:
                    by_tier[subscription.tier.value] += 1
                revenue += monthly_price(self.pricing, subscription.tier)

            response = SystemStatsResponse(
                total_churches=total_churches,
                total_users=total_users,
                active_subscriptions=by_tier,
                monthly_revenue=round(revenue, 2),
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "analytics",
            "system_stats",
            metadata={"action": "get_system_stats"},
        )
        return Return.ok(response)
