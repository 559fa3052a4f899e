from uuid import UUID

from congregation.app.services.identity_resolver import IdentityResolver
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.auth.dtos import UserProfile
from congregation.shared_kernel.result import Result, Return


class GetProfileUseCase:
    """Returns the caller's own profile"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfile]:
        async with self.uow:
            resolved = await IdentityResolver(self.uow).resolve(user_id)
            if resolved.is_err():
                return resolved
            return Return.ok(UserProfile.model_validate(resolved.value))
