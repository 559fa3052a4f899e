"""
Login Use Case

Verifies credentials and issues an access token.
"""

import bcrypt

from congregation.api.utils.jwt import generate_jwt
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import AuthResponse, LoginCommand, UserProfile

INVALID_CREDENTIALS = Error(error_codes.UNAUTHENTICATED, "Invalid email or password")

# Checked against when the email is unknown so both paths cost one bcrypt round
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Rate limited by client address (quota "auth")
    - Constant-time password comparison to prevent timing attacks
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork, rate_limiter: RateLimiter):
        self.uow = uow
        self.rate_limiter = rate_limiter

    async def execute(self, command: LoginCommand, client_ip: str) -> Result[AuthResponse]:
        limited = await self.rate_limiter.check_ip(client_ip, "login", "auth")
        if limited.is_err():
            return limited

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            if user is None:
                bcrypt.checkpw(command.password.encode(), _DUMMY_HASH)
                return Return.err(INVALID_CREDENTIALS)

            password_valid = bcrypt.checkpw(
                command.password.encode(), user.password_hash.encode()
            )
            if not password_valid:
                return Return.err(INVALID_CREDENTIALS)

            user.last_login_at = utcnow()
            user = await self.uow.users.update(user)
            await self.uow.commit()
            response = AuthResponse(
                access_token=generate_jwt(user.id),
                user=UserProfile.model_validate(user),
            )

        return Return.ok(response)
