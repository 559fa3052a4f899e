from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from congregation.domain.entities import Subscription, SubscriptionStatus


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        """Get subscription by ID"""
        pass

    @abstractmethod
    async def get_by_billing_id(self, billing_subscription_id: str) -> Optional[Subscription]:
        """Get subscription by the billing provider's subscription ID"""
        pass

    @abstractmethod
    async def get_current_for_user(self, user_id: UUID) -> Optional[Subscription]:
        """Most recent active or trialing subscription of a user"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        pass

    @abstractmethod
    async def list_recent(
        self, limit: int, status: Optional[SubscriptionStatus] = None
    ) -> List[Subscription]:
        """Subscriptions ordered by created_at DESC, optionally filtered by status"""
        pass

    @abstractmethod
    async def list_by_statuses(
        self,
        statuses: Sequence[SubscriptionStatus],
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> List[Subscription]:
        """Subscriptions in any of the statuses, optionally bounded by created_at"""
        pass

    @abstractmethod
    async def list_lapsed(self, now: datetime) -> List[Subscription]:
        """Active subscriptions whose current_period_end is before now"""
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UUID) -> int:
        """Delete every subscription of a user, returning the number deleted"""
        pass
