from datetime import date
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import daily_verse_id
from congregation.shared_kernel.result import Result, Return
from .dtos import GetVerseResponse, VerseInfo
from .verse_access import require_verse_reader_of


class GetVerseUseCase:
    """The verse of one day, or a null verse when none was saved"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, church_id: UUID, day: date) -> Result[GetVerseResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            member = await require_verse_reader_of(policy, user_id, church_id)
            if member.is_err():
                return member

            verse = await self.uow.daily_verses.get_by_id(
                daily_verse_id(church_id, day.isoformat())
            )
            info = VerseInfo.model_validate(verse) if verse is not None else None

        return Return.ok(GetVerseResponse(verse=info))
