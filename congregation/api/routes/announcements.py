from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.announcements import (
    AnnouncementInfo,
    AnnouncementListResponse,
    CreateAnnouncementCommand,
    CreateAnnouncementUseCase,
    DeleteAnnouncementResponse,
    DeleteAnnouncementUseCase,
    GetAnnouncementUseCase,
    ListAnnouncementsUseCase,
    UpdateAnnouncementCommand,
    UpdateAnnouncementUseCase,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.domain.entities import AnnouncementPriority
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/announcements", tags=["Announcements"])


class CreateAnnouncementRequest(BaseModel):
    title: SanitizedStr = Field(..., min_length=1, max_length=200)
    content: SanitizedStr = Field(..., min_length=1, max_length=5000)
    priority: AnnouncementPriority = AnnouncementPriority.medium
    is_published: bool = False
    expires_at: Optional[datetime] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AnnouncementInfo)
async def create_announcement(
    request: CreateAnnouncementRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Create Announcement in the caller's church

    Raises:
        - 400 Bad Request: Caller has no church
        - 403 Forbidden: Caller is not pastor or admin
    """
    command = CreateAnnouncementCommand(**request.model_dump())
    use_case = CreateAnnouncementUseCase(uow, audit, rate_limiter)
    result = await use_case.execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdateAnnouncementRequest(BaseModel):
    title: Optional[SanitizedStr] = Field(None, min_length=1, max_length=200)
    content: Optional[SanitizedStr] = Field(None, min_length=1, max_length=5000)
    priority: Optional[AnnouncementPriority] = None
    is_published: Optional[bool] = None
    expires_at: Optional[datetime] = None


@router.patch(
    "/{announcement_id}", status_code=status.HTTP_200_OK, response_model=AnnouncementInfo
)
async def update_announcement(
    announcement_id: UUID,
    request: UpdateAnnouncementRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    command = UpdateAnnouncementCommand(
        announcement_id=announcement_id,
        changes=request.model_dump(exclude_unset=True, exclude_none=True),
    )
    use_case = UpdateAnnouncementUseCase(uow, audit, rate_limiter)
    result = await use_case.execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteAnnouncementResponse,
)
async def delete_announcement(
    announcement_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await DeleteAnnouncementUseCase(uow, audit).execute(user_id, announcement_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=AnnouncementListResponse)
async def list_announcements(
    limit: int = Query(20, ge=1, le=100),
    only_published: bool = Query(True),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await ListAnnouncementsUseCase(uow, audit).execute(user_id, limit, only_published)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{announcement_id}", status_code=status.HTTP_200_OK, response_model=AnnouncementInfo
)
async def get_announcement(
    announcement_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetAnnouncementUseCase(uow, audit).execute(user_id, announcement_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
