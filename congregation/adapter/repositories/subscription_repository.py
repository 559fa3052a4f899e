from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.subscription_repository import ISubscriptionRepository
from congregation.domain.entities import Subscription, SubscriptionStatus


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        stmt = select(Subscription).where(Subscription.id == subscription_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_billing_id(self, billing_subscription_id: str) -> Optional[Subscription]:
        stmt = select(Subscription).where(
            Subscription.billing_subscription_id == billing_subscription_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_current_for_user(self, user_id: UUID) -> Optional[Subscription]:
        stmt = (
            select(Subscription)
            .where(
                Subscription.user_id == user_id,
                Subscription.status.in_(
                    [SubscriptionStatus.active, SubscriptionStatus.trialing]
                ),
            )
            .order_by(Subscription.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, subscription: Subscription) -> Subscription:
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def list_recent(
        self, limit: int, status: Optional[SubscriptionStatus] = None
    ) -> List[Subscription]:
        stmt = select(Subscription)
        if status is not None:
            stmt = stmt.where(Subscription.status == status)
        stmt = stmt.order_by(Subscription.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_statuses(
        self,
        statuses: Sequence[SubscriptionStatus],
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Subscription]:
        stmt = select(Subscription).where(Subscription.status.in_(list(statuses)))
        if created_from is not None:
            stmt = stmt.where(Subscription.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(Subscription.created_at <= created_to)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_lapsed(self, now: datetime) -> List[Subscription]:
        stmt = select(Subscription).where(
            Subscription.status == SubscriptionStatus.active,
            Subscription.current_period_end != None,
            Subscription.current_period_end < now,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_by_user(self, user_id: UUID) -> int:
        stmt = delete(Subscription).where(Subscription.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
