from uuid import UUID

from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import User
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return


class IdentityResolver:
    """
    Loads the user record every access check is evaluated against.

    Pure read through the caller's unit of work, which must already be entered.
    The returned role is a snapshot for the rest of the request.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, user_id: UUID) -> Result[User]:
        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            return Return.err(Error(error_codes.NOT_FOUND, "User not found"))
        return Return.ok(user)
