from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import CalendarDay, VerseCalendarResponse
from .verse_access import require_verse_reader_of


class GetVerseCalendarUseCase:
    """Verses of one month keyed by their YYYY-MM-DD date"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, church_id: UUID, year: int, month: int
    ) -> Result[VerseCalendarResponse]:
        if not 1 <= month <= 12:
            return Return.err(Error(error_codes.INVALID_ARGUMENT, "Invalid month"))

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            member = await require_verse_reader_of(policy, user_id, church_id)
            if member.is_err():
                return member

            # "-31" bounds every month since dates compare as strings
            verses = await self.uow.daily_verses.list_between(
                church_id, f"{year}-{month:02d}-01", f"{year}-{month:02d}-31"
            )
            response = VerseCalendarResponse(
                verses={
                    verse.date: CalendarDay(
                        reference=verse.reference,
                        theme=verse.theme,
                        has_reflection=bool(verse.reflection),
                    )
                    for verse in verses
                }
            )

        return Return.ok(response)
