from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import EventInfo


class GetEventUseCase:
    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, event_id: UUID) -> Result[EventInfo]:
        async with self.uow:
            event = await self.uow.events.get_by_id(event_id)
            if event is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Event not found"))

            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            same_church = await policy.ensure_member_of(
                resolved.value,
                event.church_id,
                message="Cannot view events from another church",
            )
            if same_church.is_err():
                return same_church
            info = EventInfo.model_validate(event)

        await self.audit.record_data_access(user_id, DataAction.READ, "events", event_id)
        return Return.ok(info)
