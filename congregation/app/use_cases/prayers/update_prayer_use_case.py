from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import PrayerInfo, UpdatePrayerCommand

UPDATABLE_FIELDS = (
    "title",
    "content",
    "visibility",
    "category",
    "is_answered",
    "answered_note",
)


class UpdatePrayerUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Only the owner may update
    - answered_at is set the first time the prayer is marked answered
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: UpdatePrayerCommand) -> Result[PrayerInfo]:
        limited = await self.rate_limiter.check_user(user_id, "update_prayer", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            prayer = await self.uow.prayers.get_by_id(command.prayer_id)
            if prayer is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Prayer not found"))

            if prayer.user_id != user_id:
                return Return.err(
                    Error(error_codes.PERMISSION_DENIED, "Can only update your own prayers")
                )

            was_answered = prayer.is_answered
            for field, value in command.changes.items():
                if field in UPDATABLE_FIELDS:
                    setattr(prayer, field, value)

            now = utcnow()
            if prayer.is_answered and not was_answered and prayer.answered_at is None:
                prayer.answered_at = now
            prayer.updated_at = now

            prayer = await self.uow.prayers.update(prayer)
            await self.uow.commit()
            info = PrayerInfo.model_validate(prayer)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "prayers",
            info.id,
            metadata={"action": "update_prayer"},
        )
        return Return.ok(info)
