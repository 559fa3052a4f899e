from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import BibleVersion, ChurchTheme, DataAction
from congregation.shared_kernel.result import Result, Return
from .dtos import ToggleAutoGenerateResponse
from .verse_access import require_verse_manager_of


class ToggleAutoGenerateUseCase:
    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self,
        user_id: UUID,
        church_id: UUID,
        enabled: bool,
        preferred_version: BibleVersion = BibleVersion.NIV,
    ) -> Result[ToggleAutoGenerateResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            manager = await require_verse_manager_of(policy, user_id, church_id)
            if manager.is_err():
                return manager

            settings = await self.uow.church_themes.get(church_id)
            if settings is None:
                settings = ChurchTheme(church_id=church_id)

            settings.auto_generate = enabled
            settings.preferred_version = preferred_version
            settings.updated_by = user_id
            settings.updated_at = utcnow()

            await self.uow.church_themes.save(settings)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "church_themes",
            church_id,
            metadata={"action": "toggle_auto_generate", "enabled": enabled},
        )
        return Return.ok(ToggleAutoGenerateResponse(enabled=enabled))
