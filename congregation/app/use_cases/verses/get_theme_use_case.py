from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.shared_kernel.result import Result, Return
from .dtos import ChurchThemeResponse, ThemeInfo
from .verse_access import require_verse_reader_of


class GetThemeUseCase:
    """Theme settings of a church; defaults when none were saved"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, church_id: UUID) -> Result[ChurchThemeResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            member = await require_verse_reader_of(policy, user_id, church_id)
            if member.is_err():
                return member

            settings = await self.uow.church_themes.get(church_id)
            if settings is None:
                return Return.ok(ChurchThemeResponse())

            response = ChurchThemeResponse(
                weekly=ThemeInfo(**settings.weekly_theme) if settings.weekly_theme else None,
                monthly=ThemeInfo(**settings.monthly_theme) if settings.monthly_theme else None,
                auto_generate=settings.auto_generate,
                preferred_version=settings.preferred_version,
            )

        return Return.ok(response)
