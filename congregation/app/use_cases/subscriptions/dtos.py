"""
Subscription Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from congregation.domain.entities import SubscriptionStatus, SubscriptionTier


class SubscriptionStatusResponse(BaseModel):
    has_subscription: bool
    tier: SubscriptionTier = SubscriptionTier.free
    status: Optional[SubscriptionStatus] = None
    current_period_end: Optional[datetime] = None


class CancelSubscriptionCommand(BaseModel):
    subscription_id: UUID
    reason: Optional[str] = None


class CancelSubscriptionResponse(BaseModel):
    message: str


class SubscriptionSummary(BaseModel):
    """Admin view; the owner is never exposed"""

    id: UUID
    user_id: str = "[REDACTED]"
    tier: SubscriptionTier
    status: SubscriptionStatus
    current_period_end: Optional[datetime] = None
    created_at: datetime


class SubscriptionListResponse(BaseModel):
    subscriptions: List[SubscriptionSummary]


class BillingSyncCommand(BaseModel):
    billing_subscription_id: str
    user_id: UUID
    tier: SubscriptionTier
    status: SubscriptionStatus
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None


class BillingSyncResponse(BaseModel):
    subscription_id: UUID
    tier: SubscriptionTier
    status: SubscriptionStatus
