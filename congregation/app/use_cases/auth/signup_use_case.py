import bcrypt

from congregation.api.utils.jwt import generate_jwt
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.entities import User
from congregation.domain.exceptions import DuplicateEmailError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return
from .dtos import AuthResponse, SignupCommand, UserProfile

EMAIL_TAKEN = Error(error_codes.ALREADY_EXISTS, "Email already registered")


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Rate limit by client address (quota "auth")
    2. Reject an email that is already registered
    3. Hash password with bcrypt cost factor 12
    4. Create the user as guest on the free tier; display name defaults to
       the local part of the email
    5. Commit and issue an access token
    """

    def __init__(self, uow: UnitOfWork, rate_limiter: RateLimiter):
        self.uow = uow
        self.rate_limiter = rate_limiter

    async def execute(self, command: SignupCommand, client_ip: str) -> Result[AuthResponse]:
        limited = await self.rate_limiter.check_ip(client_ip, "signup", "auth")
        if limited.is_err():
            return limited

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(EMAIL_TAKEN)

            # Hash password with bcrypt cost factor 12
            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                display_name=command.display_name or command.email.split("@")[0],
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                # Lost a race with a concurrent signup for the same email
                return Return.err(EMAIL_TAKEN)

            await self.uow.commit()
            response = AuthResponse(
                access_token=generate_jwt(user.id),
                user=UserProfile.model_validate(user),
            )

        return Return.ok(response)
