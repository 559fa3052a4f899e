from uuid import UUID

from congregation.app.services.access_policy import AccessPolicy
from congregation.domain.entities import User
from congregation.shared_kernel.result import Result

NOT_IN_CHURCH_MESSAGE = "You do not belong to this church"


async def require_verse_manager_of(
    policy: AccessPolicy, user_id: UUID, church_id: UUID
) -> Result[User]:
    """Pastor or admin (never super admin) who belongs to church_id"""
    authorized = await policy.require_verse_manager(user_id)
    if authorized.is_err():
        return authorized
    return await policy.ensure_member_of(
        authorized.value, church_id, message=NOT_IN_CHURCH_MESSAGE
    )


async def require_verse_reader_of(
    policy: AccessPolicy, user_id: UUID, church_id: UUID
) -> Result[User]:
    resolved = await policy.identities.resolve(user_id)
    if resolved.is_err():
        return resolved
    return await policy.ensure_member_of(
        resolved.value, church_id, message=NOT_IN_CHURCH_MESSAGE
    )
