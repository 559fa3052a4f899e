from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy, require_church_context
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import AnnouncementInfo, AnnouncementListResponse


class ListAnnouncementsUseCase:
    """
    Announcements of the caller's church, newest first.

    Expired announcements are dropped after the query, so fewer than `limit`
    may be returned.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, limit: int = 20, only_published: bool = True
    ) -> Result[AnnouncementListResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            church = require_church_context(resolved.value)
            if church.is_err():
                return church
            church_id = church.value

            member = await policy.require_church_member(user_id, church_id)
            if member.is_err():
                return member

            announcements = await self.uow.announcements.list_by_church(
                church_id, only_published, limit
            )

            now = utcnow()
            active = [
                AnnouncementInfo.model_validate(a)
                for a in announcements
                if a.expires_at is None or a.expires_at > now
            ]

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "announcements",
            church_id,
            metadata={"action": "get_church_announcements", "count": len(active)},
        )
        return Return.ok(AnnouncementListResponse(announcements=active))
