from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc, utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import EventInfo, UpdateEventCommand
from .validation import validate_event_dates

UPDATABLE_FIELDS = (
    "title",
    "description",
    "location",
    "start_date",
    "end_date",
    "category",
    "max_attendees",
    "is_published",
)


class UpdateEventUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must be pastor, admin or super_admin of the event's church
    - After the update end_date must still be after start_date
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: UpdateEventCommand) -> Result[EventInfo]:
        limited = await self.rate_limiter.check_user(user_id, "update_event", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            event = await self.uow.events.get_by_id(command.event_id)
            if event is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Event not found"))

            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized

            same_church = await policy.ensure_member_of(
                authorized.value,
                event.church_id,
                message="Cannot update events from another church",
            )
            if same_church.is_err():
                return same_church

            changes = {
                field: value
                for field, value in command.changes.items()
                if field in UPDATABLE_FIELDS
            }
            for field in ("start_date", "end_date"):
                if field in changes:
                    changes[field] = to_naive_utc(changes[field])

            dates = validate_event_dates(
                changes.get("start_date", event.start_date),
                changes.get("end_date", event.end_date),
            )
            if dates.is_err():
                return dates

            for field, value in changes.items():
                setattr(event, field, value)
            event.updated_at = utcnow()

            event = await self.uow.events.update(event)
            await self.uow.commit()
            info = EventInfo.model_validate(event)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "events",
            info.id,
            metadata={"action": "update_event"},
        )
        return Return.ok(info)
