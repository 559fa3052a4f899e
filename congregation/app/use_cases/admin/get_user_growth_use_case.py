from collections import Counter
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import MonthlyGrowth, UserGrowthResponse


class GetUserGrowthUseCase:
    """New users per calendar month with the running total, oldest month first"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID) -> Result[UserGrowthResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            signups = await self.uow.users.list_created_at()

        per_month = Counter(created_at.strftime("%Y-%m") for created_at in signups)
        growth = []
        running_total = 0
        for month in sorted(per_month):
            running_total += per_month[month]
            growth.append(
                MonthlyGrowth(month=month, new_users=per_month[month], total_users=running_total)
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "analytics",
            "user_growth",
            metadata={"action": "get_user_growth"},
        )
        return Return.ok(UserGrowthResponse(total_users=len(signups), growth_by_month=growth))
