"""
Create Church Use Case

Creates a church with a unique join code and makes the caller its pastor.
"""

import logging
from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import generate_church_code, utcnow
from congregation.domain.entities import Church, ChurchMember, DataAction, UserRole
from congregation.domain.exceptions import DuplicateChurchCodeError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import CreateChurchCommand, CreateChurchResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_CODE_ATTEMPTS = 10


class CreateChurchUseCase:
    """
    Use case for creating a church.

    Business Rules:
    - Rate limited per user (quota "church")
    - Caller must be pastor, admin or super_admin
    - code is drawn at random and pre-checked; the unique index on
      churches.code rejects a code taken concurrently, in which case the
      transaction is rolled back and a fresh code is drawn
    - Caller becomes pastor of the new church and gets an active member row
    """

    def __init__(
        self,
        uow: UnitOfWork,
        audit: AuditRecorder,
        rate_limiter: RateLimiter,
        max_code_attempts: int = DEFAULT_MAX_CODE_ATTEMPTS,
    ):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter
        self.max_code_attempts = max_code_attempts

    async def execute(
        self, user_id: UUID, command: CreateChurchCommand
    ) -> Result[CreateChurchResponse]:
        limited = await self.rate_limiter.check_user(user_id, "create_church", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_pastor_or_admin(user_id)
            if authorized.is_err():
                return authorized

            church = None
            for attempt in range(1, self.max_code_attempts + 1):
                code = generate_church_code()
                if await self.uow.churches.code_exists(code):
                    continue

                try:
                    church = await self.uow.churches.create(
                        Church(
                            name=command.name,
                            code=code,
                            pastor_id=user_id,
                            admin_ids=[str(user_id)],
                            description=command.description,
                            address=command.address,
                            phone=command.phone,
                            email=command.email,
                            member_count=1,
                            active_members=1,
                        )
                    )
                except DuplicateChurchCodeError:
                    logger.warning(
                        f"Church code collision on attempt {attempt}, retrying"
                    )
                    await self.uow.rollback()
                    church = None
                    continue
                break

            if church is None:
                logger.error(
                    f"No unique church code after {self.max_code_attempts} attempts"
                )
                return Return.err(
                    Error(error_codes.INTERNAL, "Failed to generate a unique church code")
                )

            # Re-read: a rollback above expires every loaded instance
            user = await self.uow.users.get_by_id(user_id)
            user.church_id = church.id
            user.role = UserRole.pastor
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.church_members.create(
                ChurchMember(
                    church_id=church.id,
                    user_id=user_id,
                    role=UserRole.pastor,
                    invited_by=user_id,
                )
            )

            await self.uow.commit()
            response = CreateChurchResponse(
                church_id=church.id, church_code=church.code, name=church.name
            )

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "churches",
            response.church_id,
            metadata={"action": "create_church", "churchName": response.name},
        )

        return Return.ok(response)
