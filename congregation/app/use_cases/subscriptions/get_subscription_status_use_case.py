from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction, SubscriptionTier
from congregation.shared_kernel.result import Result, Return
from .dtos import SubscriptionStatusResponse


class GetSubscriptionStatusUseCase:
    """The caller's active or trialing subscription, or the free tier"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID) -> Result[SubscriptionStatusResponse]:
        async with self.uow:
            subscription = await self.uow.subscriptions.get_current_for_user(user_id)
            if subscription is None:
                return Return.ok(
                    SubscriptionStatusResponse(has_subscription=False, tier=SubscriptionTier.free)
                )

            subscription_id = subscription.id
            response = SubscriptionStatusResponse(
                has_subscription=True,
                tier=subscription.tier,
                status=subscription.status,
                current_period_end=subscription.current_period_end,
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "subscriptions",
            subscription_id,
            metadata={"action": "get_subscription_status"},
        )
        return Return.ok(response)
