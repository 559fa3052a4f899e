from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy, require_church_context
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import PrayerInfo, PrayerListResponse

VISIBILITY_OPTIONS = ("public", "church", "my")


class ListPrayersUseCase:
    """
    Lists prayers by audience:

    - public: every public prayer
    - church: church-visibility prayers of the caller's church
    - my: the caller's own prayers, any visibility

    only_active drops answered prayers after the query.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self,
        user_id: UUID,
        visibility: str = "public",
        limit: int = 20,
        only_active: bool = True,
    ) -> Result[PrayerListResponse]:
        if visibility not in VISIBILITY_OPTIONS:
            return Return.err(
                Error(error_codes.INVALID_ARGUMENT, "Invalid visibility option")
            )

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved

            if visibility == "public":
                prayers = await self.uow.prayers.list_public(limit)
            elif visibility == "church":
                church = require_church_context(
                    resolved.value, "User must be a member of a church to view church prayers"
                )
                if church.is_err():
                    return church

                member = await policy.require_church_member(user_id, church.value)
                if member.is_err():
                    return member

                prayers = await self.uow.prayers.list_for_church(church.value, limit)
            else:
                prayers = await self.uow.prayers.list_by_user(user_id, limit)

            if only_active:
                prayers = [prayer for prayer in prayers if not prayer.is_answered]
            infos = [PrayerInfo.model_validate(p) for p in prayers]

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "prayers",
            visibility,
            metadata={"action": "get_prayers", "count": len(infos)},
        )
        return Return.ok(PrayerListResponse(prayers=infos))
