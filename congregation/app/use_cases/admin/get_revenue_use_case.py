from datetime import datetime
from typing import Mapping, Optional
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc
from congregation.domain.entities import DataAction, SubscriptionStatus, SubscriptionTier
from congregation.shared_kernel.result import Result, Return
from .dtos import RevenueResponse, TierRevenue
from .pricing import monthly_price


class GetRevenueUseCase:
    """
    Revenue over active and cancelled subscriptions created in the optional
    date range. Only active subscriptions count towards recurring revenue.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, pricing: Mapping[str, float]):
        self.uow = uow
        self.audit = audit
        self.pricing = pricing

    async def execute(
        self,
        user_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Result[RevenueResponse]:
        start_date = to_naive_utc(start_date)
        end_date = to_naive_utc(end_date)

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            subscriptions = await self.uow.subscriptions.list_by_statuses(
                [SubscriptionStatus.active, SubscriptionStatus.cancelled],
                created_from=start_date,
                created_to=end_date,
            )

            by_tier = {
                SubscriptionTier.basic.value: TierRevenue(),
                SubscriptionTier.premium.value: TierRevenue(),
            }
            active = 0
            cancelled = 0
            mrr = 0.0
            for subscription in subscriptions:
                if subscription.status == SubscriptionStatus.cancelled:
                    cancelled += 1
                    continue

                active += 1
                price = monthly_price(self.pricing, subscription.tier)
                mrr += price
                tier = by_tier.get(subscription.tier.value)
                if tier is not None:
                    tier.count += 1
                    tier.mrr = round(tier.mrr + price, 2)

            response = RevenueResponse(
                total_subscriptions=len(subscriptions),
                active_subscriptions=active,
                cancelled_subscriptions=cancelled,
                monthly_recurring_revenue=round(mrr, 2),
                annual_recurring_revenue=round(mrr * 12, 2),
                by_tier=by_tier,
                start_date=start_date,
                end_date=end_date,
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "analytics",
            "revenue",
            metadata={
                "action": "get_revenue_analytics",
                "startDate": start_date,
                "endDate": end_date,
            },
        )
        return Return.ok(response)
