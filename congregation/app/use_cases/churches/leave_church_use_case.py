from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.identity_resolver import IdentityResolver
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction, UserRole
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import LeaveChurchResponse


class LeaveChurchUseCase:
    """
    Business Rules:
    - Caller must belong to a church
    - The church's pastor cannot leave
    - Membership is deactivated, never deleted; role falls back to guest
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID) -> Result[LeaveChurchResponse]:
        async with self.uow:
            resolved = await IdentityResolver(self.uow).resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            church_id = user.church_id
            if church_id is None:
                return Return.err(
                    Error(error_codes.FAILED_PRECONDITION, "User is not in a church")
                )

            church = await self.uow.churches.get_by_id(church_id)
            if church is not None and church.pastor_id == user.id:
                return Return.err(
                    Error(
                        error_codes.FAILED_PRECONDITION,
                        "Pastor cannot leave church. Transfer ownership first.",
                    )
                )

            now = utcnow()
            membership = await self.uow.church_members.get(church_id, user.id)
            if membership is not None and membership.is_active:
                membership.is_active = False
                membership.left_at = now
                await self.uow.church_members.update(membership)

            if church is not None:
                church.active_members = max(0, church.active_members - 1)
                church.updated_at = now
                await self.uow.churches.update(church)

            user.church_id = None
            user.role = UserRole.guest
            user.updated_at = now
            await self.uow.users.update(user)

            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "church_members",
            church_id,
            metadata={"action": "leave_church"},
        )
        return Return.ok(LeaveChurchResponse(message="Successfully left church"))
