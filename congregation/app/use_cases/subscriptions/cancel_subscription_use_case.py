import logging
from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction, SubscriptionStatus
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import CancelSubscriptionCommand, CancelSubscriptionResponse

logger = logging.getLogger(__name__)


class CancelSubscriptionUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "subscription")
    - Only the owner may cancel
    - The subscription stays usable until the end of the billing period;
      the billing provider reports the final expiry through billing sync
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(
        self, user_id: UUID, command: CancelSubscriptionCommand
    ) -> Result[CancelSubscriptionResponse]:
        limited = await self.rate_limiter.check_user(
            user_id, "cancel_subscription", "subscription"
        )
        if limited.is_err():
            return limited

        async with self.uow:
            subscription = await self.uow.subscriptions.get_by_id(command.subscription_id)
            if subscription is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Subscription not found"))

            if subscription.user_id != user_id:
                return Return.err(
                    Error(error_codes.PERMISSION_DENIED, "Not your subscription")
                )

            now = utcnow()
            subscription.status = SubscriptionStatus.cancelled
            subscription.cancelled_at = now
            subscription.cancel_reason = command.reason
            subscription.updated_at = now
            await self.uow.subscriptions.update(subscription)

            user = await self.uow.users.get_by_id(user_id)
            if user is not None:
                user.subscription_status = SubscriptionStatus.cancelled
                user.updated_at = now
                await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"Subscription {command.subscription_id} cancelled by user {user_id}")

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "subscriptions",
            command.subscription_id,
            metadata={"action": "cancel_subscription"},
        )
        return Return.ok(
            CancelSubscriptionResponse(
                message="Subscription will be cancelled at the end of the billing period"
            )
        )
