from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.prayers import (
    CreatePrayerCommand,
    CreatePrayerUseCase,
    DeletePrayerUseCase,
    GetPrayerSupportersUseCase,
    GetPrayerUseCase,
    ListPrayersUseCase,
    PrayerInfo,
    PrayerListResponse,
    PrayerMessageResponse,
    PrayForPrayerUseCase,
    SupporterListResponse,
    UpdatePrayerCommand,
    UpdatePrayerUseCase,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.domain.entities import PrayerCategory, PrayerVisibility
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/prayers", tags=["Prayers"])


class CreatePrayerRequest(BaseModel):
    title: SanitizedStr = Field(..., min_length=1, max_length=200)
    content: SanitizedStr = Field(..., min_length=1, max_length=5000)
    visibility: PrayerVisibility = PrayerVisibility.church
    category: PrayerCategory = PrayerCategory.general


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PrayerInfo)
async def create_prayer(
    request: CreatePrayerRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Create Prayer Request

    A church prayer from a caller without a church is stored as private.
    """
    command = CreatePrayerCommand(**request.model_dump())
    result = await CreatePrayerUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdatePrayerRequest(BaseModel):
    title: Optional[SanitizedStr] = Field(None, min_length=1, max_length=200)
    content: Optional[SanitizedStr] = Field(None, min_length=1, max_length=5000)
    visibility: Optional[PrayerVisibility] = None
    category: Optional[PrayerCategory] = None
    is_answered: Optional[bool] = None
    answered_note: Optional[SanitizedStr] = Field(None, max_length=1000)


@router.patch("/{prayer_id}", status_code=status.HTTP_200_OK, response_model=PrayerInfo)
async def update_prayer(
    prayer_id: UUID,
    request: UpdatePrayerRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    command = UpdatePrayerCommand(
        prayer_id=prayer_id, changes=request.model_dump(exclude_unset=True, exclude_none=True)
    )
    result = await UpdatePrayerUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{prayer_id}", status_code=status.HTTP_200_OK, response_model=PrayerMessageResponse)
async def delete_prayer(
    prayer_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await DeletePrayerUseCase(uow, audit).execute(user_id, prayer_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=PrayerListResponse)
async def list_prayers(
    visibility: str = Query("public", description="public, church or my"),
    limit: int = Query(20, ge=1, le=100),
    only_active: bool = Query(True),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    List Prayers

    Raises:
        - 400 Bad Request: Unknown visibility, or church prayers without a church
        - 403 Forbidden: Not a member of the church
    """
    use_case = ListPrayersUseCase(uow, audit)
    result = await use_case.execute(user_id, visibility, limit, only_active)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{prayer_id}", status_code=status.HTTP_200_OK, response_model=PrayerInfo)
async def get_prayer(
    prayer_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetPrayerUseCase(uow, audit).execute(user_id, prayer_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{prayer_id}/pray", status_code=status.HTTP_200_OK, response_model=PrayerMessageResponse)
async def pray_for_prayer(
    prayer_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await PrayForPrayerUseCase(uow, audit).execute(user_id, prayer_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{prayer_id}/supporters", status_code=status.HTTP_200_OK, response_model=SupporterListResponse
)
async def get_prayer_supporters(
    prayer_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetPrayerSupportersUseCase(uow, audit).execute(user_id, prayer_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
