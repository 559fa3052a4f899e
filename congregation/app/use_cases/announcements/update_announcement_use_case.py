from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc, utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import AnnouncementInfo, UpdateAnnouncementCommand

UPDATABLE_FIELDS = ("title", "content", "priority", "is_published", "expires_at")


class UpdateAnnouncementUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must be pastor, admin or super_admin of the announcement's church
    - published_at is set the first time the announcement becomes published
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(
        self, user_id: UUID, command: UpdateAnnouncementCommand
    ) -> Result[AnnouncementInfo]:
        limited = await self.rate_limiter.check_user(user_id, "update_announcement", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            announcement = await self.uow.announcements.get_by_id(command.announcement_id)
            if announcement is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Announcement not found"))

            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized

            same_church = await policy.ensure_member_of(
                authorized.value,
                announcement.church_id,
                message="Cannot update announcements from another church",
            )
            if same_church.is_err():
                return same_church

            was_published = announcement.is_published
            for field, value in command.changes.items():
                if field == "expires_at":
                    value = to_naive_utc(value)
                if field in UPDATABLE_FIELDS:
                    setattr(announcement, field, value)

            now = utcnow()
            if announcement.is_published and not was_published:
                announcement.published_at = now
            announcement.updated_at = now

            announcement = await self.uow.announcements.update(announcement)
            await self.uow.commit()
            info = AnnouncementInfo.model_validate(announcement)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "announcements",
            info.id,
            metadata={"action": "update_announcement"},
        )
        return Return.ok(info)
