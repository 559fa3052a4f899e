from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import ChurchInfo, UpdateChurchCommand

UPDATABLE_FIELDS = ("name", "description", "address", "phone", "email")


class UpdateChurchUseCase:
    """
    Use case for updating church details.

    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must be pastor or admin of this church (super_admin exempt from
      the church check)
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: UpdateChurchCommand) -> Result[ChurchInfo]:
        limited = await self.rate_limiter.check_user(user_id, "update_church", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_church_pastor(user_id, command.church_id)
            if authorized.is_err():
                return authorized

            church = await self.uow.churches.get_by_id(command.church_id)
            if church is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Church not found"))

            for field, value in command.changes.items():
                if field in UPDATABLE_FIELDS:
                    setattr(church, field, value)
            church.updated_at = utcnow()

            church = await self.uow.churches.update(church)
            await self.uow.commit()
            info = ChurchInfo.model_validate(church)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "churches",
            info.id,
            metadata={"action": "update_church"},
        )
        return Return.ok(info)
