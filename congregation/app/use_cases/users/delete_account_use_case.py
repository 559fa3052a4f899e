"""
Delete Account Use Case

Removes a user and the data that belongs to them. Audit entries that
reference the user are kept.
"""

import logging
from uuid import UUID

from pydantic import BaseModel

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.identity_resolver import IdentityResolver
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.domain.entities import AuditResult
from congregation.shared_kernel.result import Result, Return

logger = logging.getLogger(__name__)


class DeleteAccountResponse(BaseModel):
    message: str


class DeleteAccountUseCase:
    """
    Business Rules:
    - USER_DELETED is audited before anything is removed
    - All subscriptions of the user are deleted
    - An active church membership is deactivated and the church's
      active_members decremented
    - The user record is deleted last
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(self, user_id: UUID) -> Result[DeleteAccountResponse]:
        async with self.uow:
            resolved = await IdentityResolver(self.uow).resolve(user_id)
            if resolved.is_err():
                return resolved
            user = resolved.value

            await self.audit.record(
                user.id,
                "USER_DELETED",
                "users",
                AuditResult.SUCCESS,
                resource_id=user.id,
                metadata={"email": user.email, "reason": "account_deletion"},
            )

            removed = await self.uow.subscriptions.delete_by_user(user.id)

            if user.church_id is not None:
                member = await self.uow.church_members.get(user.church_id, user.id)
                if member is not None and member.is_active:
                    member.is_active = False
                    member.left_at = utcnow()
                    await self.uow.church_members.update(member)

                    church = await self.uow.churches.get_by_id(user.church_id)
                    if church is not None:
                        church.active_members = max(0, church.active_members - 1)
                        church.updated_at = utcnow()
                        await self.uow.churches.update(church)

            await self.uow.users.delete(user)
            await self.uow.commit()

        logger.info(f"Deleted account {user_id} and {removed} subscription(s)")
        return Return.ok(DeleteAccountResponse(message="Account deleted successfully"))
