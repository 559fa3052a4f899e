from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from congregation.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from congregation.api.error import ClientError
from congregation.api.utils.jwt import verify_jwt
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter, build_quotas
from congregation.app.services.unit_of_work import UnitOfWorkFactory
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

INVALID_TOKEN = Error(error_codes.UNAUTHENTICATED, "Invalid or expired token")


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_unit_of_work_factory() -> UnitOfWorkFactory:
    """
    Factory for units of work that commit independently of the request's
    transaction. Each call opens a session that is closed on exit.
    """
    return lambda: SqlAlchemyUnitOfWork(AsyncSessionLocal(), owns_session=True)


def get_audit_recorder(
    uow_factory: UnitOfWorkFactory = Depends(get_unit_of_work_factory),
) -> AuditRecorder:
    return AuditRecorder(uow_factory)


def get_rate_limiter(
    uow_factory: UnitOfWorkFactory = Depends(get_unit_of_work_factory),
) -> RateLimiter:
    return RateLimiter(uow_factory, build_quotas(ApplicationConfig.RATE_LIMITS))


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UUID:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Only the subject is trusted. Role and church are resolved per request.

    Returns:
        The caller's user id

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error(error_codes.UNAUTHENTICATED, "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None or "sub" not in payload:
        raise ClientError(INVALID_TOKEN, status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        return UUID(payload["sub"])
    except (TypeError, ValueError):
        raise ClientError(INVALID_TOKEN, status_code=status.HTTP_401_UNAUTHORIZED)
