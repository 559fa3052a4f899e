from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import EventMessageResponse


class DeleteEventUseCase:
    """Deletes an event together with all of its registrations"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, event_id: UUID) -> Result[EventMessageResponse]:
        async with self.uow:
            event = await self.uow.events.get_by_id(event_id)
            if event is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Event not found"))

            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized

            same_church = await policy.ensure_member_of(
                authorized.value,
                event.church_id,
                message="Cannot delete events from another church",
            )
            if same_church.is_err():
                return same_church

            await self.uow.event_attendees.delete_by_event(event_id)
            await self.uow.events.delete(event)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.DELETE,
            "events",
            event_id,
            metadata={"action": "delete_event"},
        )
        return Return.ok(EventMessageResponse(message="Event deleted successfully"))
