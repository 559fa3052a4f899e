from typing import Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.churches import (
    ChurchInfo,
    ChurchMembersResponse,
    CreateChurchCommand,
    CreateChurchResponse,
    CreateChurchUseCase,
    GetChurchMembersUseCase,
    GetChurchUseCase,
    JoinChurchResponse,
    JoinChurchUseCase,
    LeaveChurchResponse,
    LeaveChurchUseCase,
    UpdateChurchCommand,
    UpdateChurchUseCase,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/churches", tags=["Church"])


class CreateChurchRequest(BaseModel):
    name: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: Optional[SanitizedStr] = Field(None, max_length=2000)
    address: Optional[Dict[str, SanitizedStr]] = None
    phone: Optional[SanitizedStr] = Field(None, max_length=50)
    email: Optional[EmailStr] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateChurchResponse)
async def create_church(
    request: CreateChurchRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Create Church

    The caller (pastor, admin or super admin) becomes the pastor of the new
    church, which gets a unique 8 character join code.

    Raises:
        - 403 Forbidden: Insufficient role
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: No unique code could be generated
    """
    command = CreateChurchCommand(**request.model_dump())

    use_case = CreateChurchUseCase(
        uow,
        audit,
        rate_limiter,
        max_code_attempts=ApplicationConfig.CHURCH_CODE_MAX_ATTEMPTS,
    )
    result = await use_case.execute(user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateChurchRequest(BaseModel):
    name: Optional[SanitizedStr] = Field(None, min_length=1, max_length=200)
    description: Optional[SanitizedStr] = Field(None, max_length=2000)
    address: Optional[Dict[str, SanitizedStr]] = None
    phone: Optional[SanitizedStr] = Field(None, max_length=50)
    email: Optional[EmailStr] = None


@router.patch("/{church_id}", status_code=status.HTTP_200_OK, response_model=ChurchInfo)
async def update_church(
    church_id: UUID,
    request: UpdateChurchRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    command = UpdateChurchCommand(
        church_id=church_id, changes=request.model_dump(exclude_unset=True, exclude_none=True)
    )
    result = await UpdateChurchUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class JoinChurchRequest(BaseModel):
    church_code: str = Field(..., min_length=8, max_length=8, pattern="^[A-Za-z0-9]{8}$")


@router.post("/join", status_code=status.HTTP_200_OK, response_model=JoinChurchResponse)
async def join_church(
    request: JoinChurchRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Join Church by code

    Raises:
        - 400 Bad Request: Caller already belongs to another church
        - 404 Not Found: Invalid church code
        - 409 Conflict: Already a member of this church
    """
    use_case = JoinChurchUseCase(uow, audit, rate_limiter)
    result = await use_case.execute(user_id, request.church_code.upper())
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/leave", status_code=status.HTTP_200_OK, response_model=LeaveChurchResponse)
async def leave_church(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await LeaveChurchUseCase(uow, audit).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{church_id}", status_code=status.HTTP_200_OK, response_model=ChurchInfo)
async def get_church(
    church_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetChurchUseCase(uow, audit).execute(user_id, church_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{church_id}/members", status_code=status.HTTP_200_OK, response_model=ChurchMembersResponse
)
async def get_church_members(
    church_id: UUID,
    limit: int = Query(20, ge=1, le=100),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Church Members

    Pastor or admin of the church only. Super admins are refused by the
    privacy partition.
    """
    result = await GetChurchMembersUseCase(uow, audit).execute(user_id, church_id, limit)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
