from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy, require_church_context
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import EventInfo, EventListResponse


class ListEventsUseCase:
    """
    Events of the caller's church, latest start first.

    With upcoming=True events that already started are dropped after the
    query, so fewer than `limit` may be returned.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self,
        user_id: UUID,
        limit: int = 20,
        only_published: bool = True,
        upcoming: bool = False,
    ) -> Result[EventListResponse]:
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

            events = await self.uow.events.list_by_church(church_id, only_published, limit)

            if upcoming:
                now = utcnow()
                events = [event for event in events if event.start_date > now]
            infos = [EventInfo.model_validate(e) for e in events]

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "events",
            church_id,
            metadata={"action": "get_church_events", "count": len(infos)},
        )
        return Return.ok(EventListResponse(events=infos))
