from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DailyVerse, DataAction, daily_verse_id
from congregation.shared_kernel.result import Result, Return
from .dtos import SavedVerse, SaveVerseCommand, SaveVerseResponse
from .verse_access import NOT_IN_CHURCH_MESSAGE


class SaveVerseUseCase:
    """
    Upserts the verse of one day for a church.

    Business Rules:
    - Caller must be pastor or admin (VERSE_MANAGEMENT) of that church
    - Rate limited per user (quota "verse")
    - Saving the same day again overwrites it and keeps its created_at
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: SaveVerseCommand) -> Result[SaveVerseResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_verse_manager(user_id)
            if authorized.is_err():
                return authorized

            limited = await self.rate_limiter.check_user(user_id, "save_daily_verse", "verse")
            if limited.is_err():
                return limited

            member = await policy.ensure_member_of(
                authorized.value, command.church_id, message=NOT_IN_CHURCH_MESSAGE
            )
            if member.is_err():
                return member

            day = command.day.isoformat()
            verse_id = daily_verse_id(command.church_id, day)
            now = utcnow()

            verse = await self.uow.daily_verses.get_by_id(verse_id)
            if verse is None:
                verse = DailyVerse(id=verse_id, church_id=command.church_id, date=day, created_at=now)

            verse.reference = command.reference
            verse.text = command.text
            verse.version = command.version
            verse.theme = command.theme
            verse.reflection = command.reflection
            verse.is_auto = False
            verse.generated_by = "pastor"
            verse.pastor_id = user_id
            verse.updated_at = now

            verse = await self.uow.daily_verses.save(verse)
            await self.uow.commit()
            response = SaveVerseResponse(
                verse=SavedVerse(
                    reference=verse.reference, text=verse.text, version=verse.version
                )
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "daily_verses",
            verse_id,
            metadata={"action": "save_daily_verse", "churchId": command.church_id},
        )
        return Return.ok(response)
