from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy, require_church_context
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import to_naive_utc, utcnow
from congregation.domain.entities import DataAction, Event
from congregation.shared_kernel.result import Result, Return
from .dtos import CreateEventCommand, EventInfo
from .validation import validate_event_dates


class CreateEventUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must belong to a church and be pastor, admin or super_admin
    - end_date must be after start_date
    - The caller is recorded as organizer
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: CreateEventCommand) -> Result[EventInfo]:
        limited = await self.rate_limiter.check_user(user_id, "create_event", "church")
        if limited.is_err():
            return limited

        start_date = to_naive_utc(command.start_date)
        end_date = to_naive_utc(command.end_date)
        dates = validate_event_dates(start_date, end_date)
        if dates.is_err():
            return dates

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            church = require_church_context(
                resolved.value, "User must be a member of a church to create events"
            )
            if church.is_err():
                return church

            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized
            user = authorized.value

            now = utcnow()
            event = await self.uow.events.create(
                Event(
                    church_id=church.value,
                    title=command.title,
                    description=command.description,
                    location=command.location,
                    start_date=start_date,
                    end_date=end_date,
                    organizer=user.display_name or "Unknown",
                    organizer_id=user.id,
                    category=command.category,
                    max_attendees=command.max_attendees,
                    is_published=command.is_published,
                    created_at=now,
                    updated_at=now,
                )
            )
            await self.uow.commit()
            info = EventInfo.model_validate(event)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "events",
            info.id,
            metadata={"action": "create_event", "churchId": info.church_id},
        )
        return Return.ok(info)
