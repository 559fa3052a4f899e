import logging

from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import SubscriptionStatus, SubscriptionTier
from congregation.shared_kernel.result import Result, Return
from .dtos import ExpireSubscriptionsResponse

logger = logging.getLogger(__name__)


class ExpireSubscriptionsUseCase:
    """Active subscriptions past current_period_end become expired; owners drop to free"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ExpireSubscriptionsResponse]:
        now = utcnow()

        async with self.uow:
            lapsed = await self.uow.subscriptions.list_lapsed(now)
            for subscription in lapsed:
                subscription.status = SubscriptionStatus.expired
                subscription.updated_at = now
                await self.uow.subscriptions.update(subscription)

                user = await self.uow.users.get_by_id(subscription.user_id)
                if user is not None:
                    user.subscription_tier = SubscriptionTier.free
                    user.subscription_status = SubscriptionStatus.expired
                    user.updated_at = now
                    await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"Expired {len(lapsed)} lapsed subscriptions")
        return Return.ok(ExpireSubscriptionsResponse(expired=len(lapsed)))
