from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import ChurchListResponse, ChurchSummary


class GetChurchListUseCase:
    """Basic church fields and member counts; no contact data or content"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, limit: int = 50) -> Result[ChurchListResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            churches = await self.uow.churches.list_recent(limit)
            response = ChurchListResponse(
                churches=[
                    ChurchSummary(
                        id=c.id,
                        name=c.name,
                        code=c.code,
                        member_count=c.member_count,
                        active_members=c.active_members,
                        is_active=c.is_active,
                        created_at=c.created_at,
                    )
                    for c in churches
                ]
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "churches",
            metadata={"action": "get_church_list", "count": len(response.churches)},
        )
        return Return.ok(response)
