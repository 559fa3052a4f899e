from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import DataAction, Prayer, PrayerVisibility
from congregation.shared_kernel.result import Result, Return
from .dtos import CreatePrayerCommand, PrayerInfo


class CreatePrayerUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - Any authenticated user may post a prayer
    - A church prayer from a user without a church is stored as private
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, command: CreatePrayerCommand) -> Result[PrayerInfo]:
        limited = await self.rate_limiter.check_user(user_id, "create_prayer", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            resolved = await policy.identities.resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            visibility = command.visibility
            if visibility == PrayerVisibility.church and user.church_id is None:
                visibility = PrayerVisibility.private

            now = utcnow()
            prayer = await self.uow.prayers.create(
                Prayer(
                    user_id=user.id,
                    user_name=user.display_name or "Anonymous",
                    church_id=user.church_id,
                    title=command.title,
                    content=command.content,
                    visibility=visibility,
                    category=command.category,
                    created_at=now,
                    updated_at=now,
                )
            )
            await self.uow.commit()
            info = PrayerInfo.model_validate(prayer)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "prayers",
            info.id,
            metadata={"action": "create_prayer", "visibility": info.visibility},
        )
        return Return.ok(info)
