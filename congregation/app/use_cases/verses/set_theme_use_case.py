from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import ChurchTheme, DataAction, ThemeType
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import SetThemeCommand, SetThemeResponse, ThemeInfo
from .verse_access import require_verse_manager_of


class SetThemeUseCase:
    """Sets the weekly or monthly theme of a church; the other one is left as is"""

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID, command: SetThemeCommand) -> Result[SetThemeResponse]:
        if command.end_date < command.start_date:
            return Return.err(
                Error(error_codes.INVALID_ARGUMENT, "End date must not be before start date")
            )

        theme = ThemeInfo(
            theme=command.theme,
            start_date=command.start_date.isoformat(),
            end_date=command.end_date.isoformat(),
            verses=command.suggested_verses,
        )

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            manager = await require_verse_manager_of(policy, user_id, command.church_id)
            if manager.is_err():
                return manager

            settings = await self.uow.church_themes.get(command.church_id)
            if settings is None:
                settings = ChurchTheme(church_id=command.church_id)

            if command.type == ThemeType.weekly:
                settings.weekly_theme = theme.model_dump()
            else:
                settings.monthly_theme = theme.model_dump()
            settings.updated_by = user_id
            settings.updated_at = utcnow()

            await self.uow.church_themes.save(settings)
            await self.uow.commit()

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "church_themes",
            command.church_id,
            metadata={"action": "set_theme", "type": command.type},
        )
        return Return.ok(SetThemeResponse(type=command.type, theme=theme))
