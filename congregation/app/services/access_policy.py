"""
Access Policy

Role checks, church membership checks and the privacy partition, all
evaluated against the identity resolved from the store. Every decision
that can deny is written to the audit trail.
"""

from enum import Enum
from typing import Dict, Optional, Sequence, Tuple
from uuid import UUID

from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.identity_resolver import IdentityResolver
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import AuditResult, PrivacyCategory, User, UserRole
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return


class PolicyAction(str, Enum):
    SUPER_ADMIN_ACCESS = "SUPER_ADMIN_ACCESS"
    PASTOR_ADMIN_ACCESS = "PASTOR_ADMIN_ACCESS"
    VERSE_MANAGEMENT = "VERSE_MANAGEMENT"


# The only place role sets are defined. Order is kept for audit entries.
POLICY_TABLE: Dict[PolicyAction, Tuple[UserRole, ...]] = {
    PolicyAction.SUPER_ADMIN_ACCESS: (UserRole.super_admin,),
    PolicyAction.PASTOR_ADMIN_ACCESS: (
        UserRole.pastor,
        UserRole.admin,
        UserRole.super_admin,
    ),
    PolicyAction.VERSE_MANAGEMENT: (UserRole.pastor, UserRole.admin),
}

CHURCH_ACCESS = "CHURCH_ACCESS"
CHURCH_PASTOR_ACCESS = "CHURCH_PASTOR_ACCESS"
PRIVACY_PARTITION = "PRIVACY_PARTITION"

NOT_CHURCH_MEMBER_MESSAGE = "User is not a member of this church"
NO_CHURCH_MESSAGE = "User must be a member of a church"


def allowed_roles_for(action: PolicyAction) -> Tuple[UserRole, ...]:
    return POLICY_TABLE[action]


def require_church_context(user: User, message: str = NO_CHURCH_MESSAGE) -> Result[UUID]:
    """The caller's church id, or FAILED_PRECONDITION when they belong to none"""
    if user.church_id is None:
        return Return.err(Error(error_codes.FAILED_PRECONDITION, message))
    return Return.ok(user.church_id)


class AccessPolicy:
    """
    Request-scoped policy engine.

    Uses the caller's unit of work (already entered) to resolve identities and
    an AuditRecorder, which writes outside that unit of work.
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.identities = IdentityResolver(uow)
        self.audit = audit

    async def authorize(
        self, user_id: UUID, allowed_roles: Sequence[UserRole], action: str
    ) -> Result[User]:
        """
        Resolve the user and require their role to be one of allowed_roles.

        Records exactly one SUCCESS or DENIED entry.

        Returns:
            Result with the resolved User, or NOT_FOUND / PERMISSION_DENIED
        """
        resolved = await self.identities.resolve(user_id)
        if resolved.is_err():
            return resolved
        user = resolved.value
        required = [role.value for role in allowed_roles]

        if user.role not in allowed_roles:
            await self.audit.record_access_decision(
                user_id,
                action,
                AuditResult.DENIED,
                required,
                metadata={"userRole": user.role},
            )
            return Return.err(
                Error(
                    error_codes.PERMISSION_DENIED,
                    f"Insufficient permissions. Required roles: {', '.join(required)}",
                )
            )

        await self.audit.record_access_decision(
            user_id,
            action,
            AuditResult.SUCCESS,
            required,
            metadata={"userRole": user.role},
        )
        return Return.ok(user)

    async def authorize_action(self, user_id: UUID, action: PolicyAction) -> Result[User]:
        return await self.authorize(user_id, allowed_roles_for(action), action.value)

    async def require_super_admin(self, user_id: UUID) -> Result[User]:
        return await self.authorize_action(user_id, PolicyAction.SUPER_ADMIN_ACCESS)

    async def require_pastor_or_admin(self, user_id: UUID) -> Result[User]:
        return await self.authorize_action(user_id, PolicyAction.PASTOR_ADMIN_ACCESS)

    async def require_verse_manager(self, user_id: UUID) -> Result[User]:
        return await self.authorize_action(user_id, PolicyAction.VERSE_MANAGEMENT)

    async def ensure_member_of(
        self,
        user: User,
        church_id: Optional[UUID],
        message: str = NOT_CHURCH_MEMBER_MESSAGE,
    ) -> Result[User]:
        """
        Require user.church_id == church_id, regardless of role.

        A super admin without a church fails like anyone else. Only a denial
        is audited.
        """
        if user.church_id is None or user.church_id != church_id:
            await self.audit.record_access_decision(
                user.id,
                CHURCH_ACCESS,
                AuditResult.DENIED,
                [],
                metadata={
                    "requestedChurchId": church_id,
                    "userChurchId": user.church_id,
                },
            )
            return Return.err(Error(error_codes.PERMISSION_DENIED, message))
        return Return.ok(user)

    async def require_church_member(self, user_id: UUID, church_id: UUID) -> Result[User]:
        resolved = await self.identities.resolve(user_id)
        if resolved.is_err():
            return resolved
        return await self.ensure_member_of(resolved.value, church_id)

    async def require_church_pastor(self, user_id: UUID, church_id: UUID) -> Result[User]:
        """Pastor or admin of this church; a super admin is exempt from the church check"""
        authorized = await self.require_pastor_or_admin(user_id)
        if authorized.is_err():
            return authorized
        user = authorized.value

        if user.church_id != church_id and user.role != UserRole.super_admin:
            await self.audit.record_access_decision(
                user_id,
                CHURCH_PASTOR_ACCESS,
                AuditResult.DENIED,
                [role.value for role in allowed_roles_for(PolicyAction.PASTOR_ADMIN_ACCESS)],
                metadata={
                    "requestedChurchId": church_id,
                    "userChurchId": user.church_id,
                },
            )
            return Return.err(
                Error(error_codes.PERMISSION_DENIED, "User is not a pastor of this church")
            )
        return Return.ok(user)

    async def enforce_no_tenant_access(
        self,
        user: User,
        category: PrivacyCategory,
        church_id: Optional[UUID] = None,
    ) -> Result[None]:
        """
        Privacy partition: a super admin may never read tenant content of these
        categories, even right after passing require_super_admin. No-op for
        every other role. Aggregate statistics must not call this.
        """
        if user.role == UserRole.super_admin:
            metadata = {"category": category}
            if church_id is not None:
                metadata["requestedChurchId"] = church_id
            await self.audit.record_access_decision(
                user.id,
                PRIVACY_PARTITION,
                AuditResult.DENIED,
                [],
                metadata=metadata,
            )
            return Return.err(
                Error(
                    error_codes.PERMISSION_DENIED,
                    f"Super admins cannot access {category.value} for privacy compliance",
                )
            )
        return Return.ok()
