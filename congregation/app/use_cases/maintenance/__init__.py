"""
Maintenance Use Cases

Retention sweeps and subscription expiry, run by schedulers.
"""

from .sweep_rate_limits_use_case import SweepRateLimitsUseCase
from .sweep_audit_entries_use_case import SweepAuditEntriesUseCase
from .expire_subscriptions_use_case import ExpireSubscriptionsUseCase
from .dtos import ExpireSubscriptionsResponse, SweepResponse

__all__ = [
    "SweepRateLimitsUseCase",
    "SweepAuditEntriesUseCase",
    "ExpireSubscriptionsUseCase",
    "SweepResponse",
    "ExpireSubscriptionsResponse",
]
