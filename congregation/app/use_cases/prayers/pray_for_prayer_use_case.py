from datetime import datetime
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction, PrayerSupporter
from congregation.domain.exceptions import DuplicatePrayerSupporterError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import PrayerMessageResponse
from .visibility import ensure_prayer_visible


class PrayForPrayerUseCase:
    """
    Records that the caller prayed for a prayer request.

    Business Rules:
    - Same visibility rules as reading the prayer
    - The first prayer of a user increments prayer_count
    - A repeat prayer only refreshes prayed_at, as does a first prayer that
      loses an insert race on the supporter row
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, prayer_id: UUID) -> Result[PrayerMessageResponse]:
        async with self.uow:
            prayer = await self.uow.prayers.get_by_id(prayer_id)
            if prayer is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Prayer not found"))

            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            visible = await ensure_prayer_visible(
                policy,
                user,
                prayer,
                private_message="Cannot pray for private prayers",
                church_message="Cannot pray for prayers from another church",
            )
            if visible.is_err():
                return visible

            now = utcnow()
            supporter = await self.uow.prayer_supporters.get(prayer_id, user_id)
            if supporter is not None:
                await self._refresh(supporter, now)
            else:
                try:
                    await self.uow.prayer_supporters.create(
                        PrayerSupporter(
                            prayer_id=prayer_id,
                            user_id=user_id,
                            user_name=user.display_name or "Anonymous",
                            prayed_at=now,
                        )
                    )
                except DuplicatePrayerSupporterError:
                    # A concurrent first prayer won; count it once and refresh
                    await self.uow.rollback()
                    supporter = await self.uow.prayer_supporters.get(prayer_id, user_id)
                    if supporter is None:
                        raise
                    await self._refresh(supporter, now)
                else:
                    prayer.prayer_count += 1
                    prayer.updated_at = now
                    await self.uow.prayers.update(prayer)

            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "prayer_praying",
            prayer_id,
            metadata={"action": "pray_for_prayer"},
        )
        return Return.ok(PrayerMessageResponse(message="Prayer recorded"))

    async def _refresh(self, supporter: PrayerSupporter, now: datetime) -> None:
        supporter.prayed_at = now
        await self.uow.prayer_supporters.update(supporter)
