from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import DeleteAnnouncementResponse


class DeleteAnnouncementUseCase:
    """Pastor, admin or super_admin of the announcement's church may delete it"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, announcement_id: UUID
    ) -> Result[DeleteAnnouncementResponse]:
        async with self.uow:
            announcement = await self.uow.announcements.get_by_id(announcement_id)
            if announcement is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Announcement not found"))

            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized

            same_church = await policy.ensure_member_of(
                authorized.value,
                announcement.church_id,
                message="Cannot delete announcements from another church",
            )
            if same_church.is_err():
                return same_church

            await self.uow.announcements.delete(announcement)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.DELETE,
            "announcements",
            announcement_id,
            metadata={"action": "delete_announcement"},
        )
        return Return.ok(
            DeleteAnnouncementResponse(message="Announcement deleted successfully")
        )
