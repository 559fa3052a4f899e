from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import PrivacyCategory
from congregation.shared_kernel.result import Result, Return


class GetTenantContentUseCase:
    """
    Super admin reads of church activities, member data or sermon content.

    The role check passes for a super admin and the privacy partition then
    denies, so every caller is refused. Kept as an operation so the attempt
    is audited.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, church_id: UUID, category: PrivacyCategory
    ) -> Result[None]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_super_admin(user_id)
            if authorized.is_err():
                return authorized

            guarded = await policy.enforce_no_tenant_access(
                authorized.value, category, church_id=church_id
            )
            if guarded.is_err():
                return guarded

        return Return.ok()
