from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import AnnouncementInfo


class GetAnnouncementUseCase:
    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, announcement_id: UUID) -> Result[AnnouncementInfo]:
        async with self.uow:
            announcement = await self.uow.announcements.get_by_id(announcement_id)
            if announcement is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Announcement not found"))

            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            same_church = await policy.ensure_member_of(
                resolved.value,
                announcement.church_id,
                message="Cannot view announcements from another church",
            )
            if same_church.is_err():
                return same_church
            info = AnnouncementInfo.model_validate(announcement)

        await self.audit.record_data_access(
            user_id, DataAction.READ, "announcements", announcement_id
        )
        return Return.ok(info)
