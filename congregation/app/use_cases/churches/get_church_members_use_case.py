from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import DataAction, PrivacyCategory
from congregation.shared_kernel.result import Result, Return
from .dtos import ChurchMembersResponse, MemberInfo


class GetChurchMembersUseCase:
    """
    Lists the active members of a church, newest first.

    Business Rules:
    - Caller must be pastor or admin of the church
    - Member data is privacy partitioned: a super admin passes the pastor
      check but is denied here
    - Only basic user details are returned
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, user_id: UUID, church_id: UUID, limit: int = 20
    ) -> Result[ChurchMembersResponse]:
        async with self.uow:
            policy = AccessPolicy(self.uow, self.audit)
            authorized = await policy.require_church_pastor(user_id, church_id)
            if authorized.is_err():
                return authorized

            guarded = await policy.enforce_no_tenant_access(
                authorized.value, PrivacyCategory.member_data, church_id=church_id
            )
            if guarded.is_err():
                return guarded

            memberships = await self.uow.church_members.list_active(church_id, limit)

            members = []
            for membership in memberships:
                user = await self.uow.users.get_by_id(membership.user_id)
                if user is None:
                    continue
                members.append(
                    MemberInfo(
                        user_id=user.id,
                        display_name=user.display_name,
                        email=user.email,
                        role=membership.role,
                        joined_at=membership.joined_at,
                    )
                )
            response = ChurchMembersResponse(members=members, limit=limit, total=len(memberships))

        await self.audit.record_data_access(
            user_id,
            DataAction.READ,
            "church_members",
            church_id,
            metadata={"memberCount": len(members)},
        )
        return Return.ok(response)
