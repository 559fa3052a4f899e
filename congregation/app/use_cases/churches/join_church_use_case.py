"""
Join Church Use Case

Adds the caller to the church identified by a join code.
"""

from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.identity_resolver import IdentityResolver
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import ChurchMember, DataAction, UserRole
from congregation.domain.exceptions import DuplicateChurchMemberError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import JoinChurchResponse


class JoinChurchUseCase:
    """
    Business Rules:
    - Rate limited per user (quota "church")
    - The code must belong to an active church
    - An active member of the church cannot join again
    - A member of another church must leave it first
    - A previous (inactive) membership is reactivated instead of duplicated
    - A concurrent duplicate join is rejected by the unique membership index
    - Caller's role becomes member; member_count grows only for a first join
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder, rate_limiter: RateLimiter):
        self.uow = uow
        self.audit = audit
        self.rate_limiter = rate_limiter

    async def execute(self, user_id: UUID, church_code: str) -> Result[JoinChurchResponse]:
        limited = await self.rate_limiter.check_user(user_id, "join_church", "church")
        if limited.is_err():
            return limited

        async with self.uow:
            resolved = await IdentityResolver(self.uow).resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            church = await self.uow.churches.get_active_by_code(church_code)
            if church is None:
                return Return.err(Error(error_codes.NOT_FOUND, "Invalid church code"))

            membership = await self.uow.church_members.get(church.id, user.id)
            if user.church_id == church.id or (membership and membership.is_active):
                return Return.err(
                    Error(error_codes.ALREADY_EXISTS, "Already a member of this church")
                )

            if user.church_id is not None:
                return Return.err(
                    Error(
                        error_codes.FAILED_PRECONDITION,
                        "User already belongs to another church. Leave it first.",
                    )
                )

            now = utcnow()
            if membership is None:
                try:
                    await self.uow.church_members.create(
                        ChurchMember(church_id=church.id, user_id=user.id, role=UserRole.member)
                    )
                except DuplicateChurchMemberError:
                    await self.uow.rollback()
                    return Return.err(
                        Error(error_codes.ALREADY_EXISTS, "Already a member of this church")
                    )
                church.member_count += 1
            else:
                membership.is_active = True
                membership.role = UserRole.member
                membership.joined_at = now
                membership.left_at = None
                await self.uow.church_members.update(membership)

            church.active_members += 1
            church.updated_at = now
            await self.uow.churches.update(church)

            user.church_id = church.id
            user.role = UserRole.member
            user.updated_at = now
            await self.uow.users.update(user)

            await self.uow.commit()
            response = JoinChurchResponse(church_id=church.id, church_name=church.name)

        await self.audit.record_data_access(
            user_id,
            DataAction.WRITE,
            "church_members",
            response.church_id,
            metadata={"action": "join_church", "churchName": response.church_name},
        )
        return Return.ok(response)
