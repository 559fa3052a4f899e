from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import EventMessageResponse


class CancelRegistrationUseCase:
    """Removes the caller's own registration and decrements the attendee counter"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, event_id: UUID) -> Result[EventMessageResponse]:
        async with self.uow:
            attendee = await self.uow.event_attendees.get(event_id, user_id)
            if attendee is None:
                return Return.err(
                    Error(error_codes.NOT_FOUND, "Not registered for this event")
                )

            await self.uow.event_attendees.delete(attendee)

            event = await self.uow.events.get_by_id(event_id)
            if event is not None:
                event.current_attendees = max(0, event.current_attendees - 1)
                event.updated_at = utcnow()
                await self.uow.events.update(event)

            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.DELETE,
            "event_attendees",
            event_id,
            metadata={"action": "cancel_event_registration"},
        )
        return Return.ok(EventMessageResponse(message="Registration cancelled successfully"))
