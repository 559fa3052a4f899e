from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import AttendeeInfo, AttendeeListResponse


class GetEventAttendeesUseCase:
    """Registrations of an event, newest first; pastor or admin of its church only"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, event_id: UUID) -> Result[AttendeeListResponse]:
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
                message="Cannot view attendees from another church",
            )
            if same_church.is_err():
                return same_church

            attendees = [
                AttendeeInfo.model_validate(a)
                for a in await self.uow.event_attendees.list_by_event(event_id)
            ]

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "event_attendees",
            event_id,
            metadata={"action": "get_event_attendees", "count": len(attendees)},
        )
        return Return.ok(AttendeeListResponse(attendees=attendees))
