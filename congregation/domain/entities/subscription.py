"""
Subscription Entity

Mirror of a billing-provider subscription.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import SubscriptionStatus, SubscriptionTier


class Subscription(SQLModel, table=True):
    """
    Subscription entity.

    Business Rules:
    - Written only through the billing sync endpoint and user cancellation
    - Only the owner may cancel
    - billing_subscription_id identifies the provider record and is unique
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)

    tier: SubscriptionTier = Field(nullable=False)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.active)
    billing_subscription_id: str = Field(max_length=255)

    current_period_start: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    current_period_end: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    cancel_reason: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_subscription_billing_id", "billing_subscription_id", unique=True),
        Index("idx_subscription_status", "status"),
    )
