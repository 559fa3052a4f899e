from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction, EventAttendee
from congregation.domain.exceptions import DuplicateEventRegistrationError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import EventMessageResponse


class RegisterForEventUseCase:
    """
    Business Rules:
    - Caller must belong to the event's church
    - A full event (current_attendees >= max_attendees) rejects registrations
    - One registration per user, enforced by a unique index; current_attendees
      is incremented
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, event_id: UUID) -> Result[EventMessageResponse]:
        async with self.uow:
            event = await self.uow.events.get_by_id(event_id)
            if event is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Event not found"))

            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            same_church = await policy.ensure_member_of(
                user,
                event.church_id,
                message="Cannot register for events from another church",
            )
            if same_church.is_err():
                return same_church

            if event.max_attendees and event.current_attendees >= event.max_attendees:
                return Return.err(Error(error_codes.RESOURCE_EXHAUSTED, "Event is full"))

            existing = await self.uow.event_attendees.get(event_id, user_id)
            if existing is not None:
                return Return.err(
                    Error(error_codes.ALREADY_EXISTS, "Already registered for this event")
                )

            try:
                await self.uow.event_attendees.create(
                    EventAttendee(
                        event_id=event_id,
                        user_id=user_id,
                        user_name=user.display_name or "Unknown",
                    )
                )
            except DuplicateEventRegistrationError:
                await self.uow.rollback()
                return Return.err(
                    Error(error_codes.ALREADY_EXISTS, "Already registered for this event")
                )
            event.current_attendees += 1
            event.updated_at = utcnow()
            await self.uow.events.update(event)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "event_attendees",
            event_id,
            metadata={"action": "register_for_event"},
        )
        return Return.ok(EventMessageResponse(message="Successfully registered for event"))
