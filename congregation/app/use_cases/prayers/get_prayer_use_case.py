from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import PrayerInfo
from .visibility import ensure_prayer_visible


class GetPrayerUseCase:
    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, prayer_id: UUID) -> Result[PrayerInfo]:
        async with self.uow:
            prayer = await self.uow.prayers.get_by_id(prayer_id)
            if prayer is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Prayer not found"))

            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            visible = await ensure_prayer_visible(
                policy,
                resolved.value,
                prayer,
                private_message="Cannot view private prayers",
                church_message="Cannot view prayers from another church",
            )
            if visible.is_err():
                return visible
            info = PrayerInfo.model_validate(prayer)

        await self.audit.record_data_access(user_id, DataAction.READ, "prayers", prayer_id)
        return Return.ok(info)
