from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import ChurchInfo


class GetChurchUseCase:
    """Church details, for members of that church only"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, church_id: UUID) -> Result[ChurchInfo]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            member = await policy.require_church_member(user_id, church_id)
            if member.is_err():
                return member

            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Church not found"))
            info = ChurchInfo.model_validate(church)

        await self.audit.record_data_access(user_id, DataAction.READ, "churches", church_id)
        return Return.ok(info)
