from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from congregation.api.error import raise_for_error
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.auth import (
    AuthResponse,
    LoginCommand,
    LoginUseCase,
    SignupCommand,
    SignupUseCase,
)
from congregation.depends import get_rate_limiter, get_unit_of_work
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/auth", tags=["Authentication"])


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, max_length=128, description="User password (min 8 chars)")
    display_name: Optional[SanitizedStr] = Field(None, max_length=100)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    request: SignupRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    User Signup

    Creates a guest account on the free tier and returns an access token.

    Raises:
        - 400 Bad Request: Invalid input
        - 409 Conflict: Email already registered
        - 429 Too Many Requests: Too many signups from this address
    """
    command = SignupCommand(
        email=request.email.lower(),
        password=request.password,
        display_name=request.display_name,
    )

    use_case = SignupUseCase(uow, rate_limiter)
    result = await use_case.execute(command, client_ip(http_request))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., max_length=128, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid email or password
        - 429 Too Many Requests: Too many attempts from this address
    """
    command = LoginCommand(email=request.email.lower(), password=request.password)

    use_case = LoginUseCase(uow, rate_limiter)
    result = await use_case.execute(command, client_ip(http_request))

    if result.is_err():
        raise_for_error(result.error)

    return result.value
