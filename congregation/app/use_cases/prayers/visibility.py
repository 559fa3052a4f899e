from congregation.app.services.access_policy import AccessPolicy
from congregation.domain.entities import Prayer, PrayerVisibility, User
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return


async def ensure_prayer_visible(
    policy: AccessPolicy,
    user: User,
    prayer: Prayer,
    private_message: str,
    church_message: str,
) -> Result[User]:
    """
    A private prayer is visible to its owner only. A church prayer needs the
    caller to be a member of the prayer's church. Public prayers are open.
    """
    if prayer.visibility == PrayerVisibility.private and prayer.user_id != user.id:
        return Return.err(Error(error_codes.PERMISSION_DENIED, private_message))

    if prayer.visibility == PrayerVisibility.church:
        return await policy.ensure_member_of(user, prayer.church_id, message=church_message)

    return Return.ok(user)
