import logging

from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc, utcnow
from congregation.domain.entities import Subscription, SubscriptionStatus, SubscriptionTier
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import BillingSyncCommand, BillingSyncResponse

logger = logging.getLogger(__name__)


class SyncBillingSubscriptionUseCase:
    """
    Mirrors a billing-provider subscription into the store.

    Called service-to-service with the admin API key. Upserts by
    billing_subscription_id and copies tier and status onto the user. An
    expired subscription drops the user back to the free tier.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: BillingSyncCommand) -> Result[BillingSyncResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(command.user_id)
            if user is None:
                return Return.err(Error(error_codes.NOT_FOUND, "User not found"))

            now = utcnow()
            subscription = await self.uow.subscriptions.get_by_billing_id(
                command.billing_subscription_id
            )
            if subscription is None:
                subscription = Subscription(
                    user_id=command.user_id,
                    tier=command.tier,
                    status=command.status,
                    billing_subscription_id=command.billing_subscription_id,
                    created_at=now,
                )
                created = True
            else:
                created = False

            subscription.user_id = command.user_id
            subscription.tier = command.tier
            subscription.status = command.status
            subscription.current_period_start = to_naive_utc(command.current_period_start)
            subscription.current_period_end = to_naive_utc(command.current_period_end)
            subscription.updated_at = now

            if created:
                subscription = await self.uow.subscriptions.create(subscription)
            else:
                subscription = await self.uow.subscriptions.update(subscription)

            user.subscription_status = command.status
            user.subscription_tier = (
                SubscriptionTier.free
                if command.status == SubscriptionStatus.expired
                else command.tier
            )
            user.updated_at = now
            await self.uow.users.update(user)

            await self.uow.commit()
            response = BillingSyncResponse(
                subscription_id=subscription.id,
                tier=subscription.tier,
                status=subscription.status,
            )

        logger.info(
            f"Synced billing subscription {command.billing_subscription_id} "
            f"for user {command.user_id}: {command.tier.value}/{command.status.value}"
        )
        return Return.ok(response)
