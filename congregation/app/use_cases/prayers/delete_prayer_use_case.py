from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import PrayerMessageResponse


class DeletePrayerUseCase:
    """Owner-only delete; supporter rows go with the prayer"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, prayer_id: UUID) -> Result[PrayerMessageResponse]:
        async with self.uow:
            prayer = await self.uow.prayers.get_by_id(prayer_id)
            if prayer is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Prayer not found"))

            if prayer.user_id != user_id:
                return Return.err(
                    Error(error_codes.PERMISSION_DENIED, "Can only delete your own prayers")
                )

            await self.uow.prayer_supporters.delete_by_prayer(prayer_id)
            await self.uow.prayers.delete(prayer)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.DELETE,
            "prayers",
            prayer_id,
            metadata={"action": "delete_prayer"},
        )
        return Return.ok(PrayerMessageResponse(message="Prayer deleted successfully"))
