"""
Subscription Use Cases

Subscription status, cancellation, admin listing and billing sync.
"""

from .get_subscription_status_use_case import GetSubscriptionStatusUseCase
from .cancel_subscription_use_case import CancelSubscriptionUseCase
from .list_subscriptions_use_case import ListSubscriptionsUseCase
from .sync_billing_subscription_use_case import SyncBillingSubscriptionUseCase
from .dtos import (
    BillingSyncCommand,
    BillingSyncResponse,
    CancelSubscriptionCommand,
    CancelSubscriptionResponse,
    SubscriptionListResponse,
    SubscriptionStatusResponse,
    SubscriptionSummary,
)

__all__ = [
    # Use Cases
    "GetSubscriptionStatusUseCase",
    "CancelSubscriptionUseCase",
    "ListSubscriptionsUseCase",
    "SyncBillingSubscriptionUseCase",
    # DTOs
    "SubscriptionStatusResponse",
    "CancelSubscriptionCommand",
    "CancelSubscriptionResponse",
    "SubscriptionSummary",
    "SubscriptionListResponse",
    "BillingSyncCommand",
    "BillingSyncResponse",
]
