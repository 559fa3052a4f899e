from typing import Optional
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction, SubscriptionStatus
from congregation.shared_kernel.result import Result, Return
from .dtos import SubscriptionListResponse, SubscriptionSummary


class ListSubscriptionsUseCase:
    """Super admin listing; owners are redacted"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self,
        user_id: UUID,
        limit: int = 50,
        status: Optional[SubscriptionStatus] = None,
    ) -> Result[SubscriptionListResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            subscriptions = await self.uow.subscriptions.list_recent(limit, status)
            response = SubscriptionListResponse(
                subscriptions=[
                    SubscriptionSummary(
                        id=s.id,
                        tier=s.tier,
                        status=s.status,
                        current_period_end=s.current_period_end,
                        created_at=s.created_at,
                    )
                    for s in subscriptions
                ]
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "subscriptions",
            metadata={"action": "get_all_subscriptions", "count": len(response.subscriptions)},
        )
        return Return.ok(response)
