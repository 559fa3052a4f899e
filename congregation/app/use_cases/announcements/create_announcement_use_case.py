from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy, require_church_context
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc, utcnow
from congregation.domain.entities import Announcement, DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import AnnouncementInfo, CreateAnnouncementCommand


class CreateAnnouncementUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must belong to a church and be pastor, admin or super_admin
    - The announcement is posted to the caller's church
    - published_at is set when created published
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(
        self, user_id: UUID, command: CreateAnnouncementCommand
    ) -> Result[AnnouncementInfo]:
        limited = await self.rate_limiter.check_user(user_id, "create_announcement", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            church = require_church_context(
                resolved.value, "User must be a member of a church to create announcements"
            )
            if church.is_err():
                return church

            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized
            user = authorized.value

            now = utcnow()
            announcement = await self.uow.announcements.create(
                Announcement(
                    church_id=church.value,
                    title=command.title,
                    content=command.content,
                    author_id=user.id,
                    author_name=user.display_name or "Unknown",
                    priority=command.priority,
                    is_published=command.is_published,
                    published_at=now if command.is_published else None,
                    expires_at=to_naive_utc(command.expires_at),
                    created_at=now,
                    updated_at=now,
                )
            )
            await self.uow.commit()
            info = AnnouncementInfo.model_validate(announcement)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "announcements",
            info.id,
            metadata={"action": "create_announcement", "churchId": info.church_id},
        )
        return Return.ok(info)
