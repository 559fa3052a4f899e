from datetime import date
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction, daily_verse_id
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import VerseMessageResponse
from .verse_access import require_verse_manager_of


class DeleteVerseUseCase:
    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, church_id: UUID, day: date
    ) -> Result[VerseMessageResponse]:
        verse_id = daily_verse_id(church_id, day.isoformat())

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            manager = await require_verse_manager_of(policy, user_id, church_id)
            if manager.is_err():
                return manager

            verse = await self.uow.daily_verses.get_by_id(verse_id)
            if verse is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Verse not found"))

            await self.uow.daily_verses.delete(verse)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.DELETE,
            "daily_verses",
            verse_id,
            metadata={"action": "delete_daily_verse"},
        )
        return Return.ok(VerseMessageResponse(message="Verse deleted successfully"))
