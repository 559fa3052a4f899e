from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field

from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.verses import (
    ChurchThemeResponse,
    DeleteVerseUseCase,
    GetThemeUseCase,
    GetVerseCalendarUseCase,
    GetVerseResponse,
    GetVerseUseCase,
    SaveVerseCommand,
    SaveVerseResponse,
    SaveVerseUseCase,
    SetThemeCommand,
    SetThemeResponse,
    SetThemeUseCase,
    ToggleAutoGenerateResponse,
    ToggleAutoGenerateUseCase,
    VerseCalendarResponse,
    VerseMessageResponse,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.domain.entities import BibleVersion, ThemeType
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/churches/{church_id}/verses", tags=["Daily Verses"])


class SaveVerseRequest(BaseModel):
    reference: SanitizedStr = Field(..., min_length=1, max_length=200)
    text: SanitizedStr = Field(..., min_length=1, max_length=5000)
    version: BibleVersion = BibleVersion.NIV
    theme: Optional[SanitizedStr] = Field(None, max_length=100)
    reflection: Optional[SanitizedStr] = Field(None, max_length=1000)


@router.put("/{day}", status_code=status.HTTP_200_OK, response_model=SaveVerseResponse)
async def save_verse(
    church_id: UUID,
    day: date,
    request: SaveVerseRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Save Daily Verse

    Overwrites the verse already saved for that day.

    Raises:
        - 403 Forbidden: Not pastor or admin of this church
        - 429 Too Many Requests: Rate limit exceeded
    """
    command = SaveVerseCommand(church_id=church_id, day=day, **request.model_dump())
    result = await SaveVerseUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{day}", status_code=status.HTTP_200_OK, response_model=VerseMessageResponse)
async def delete_verse(
    church_id: UUID,
    day: date,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await DeleteVerseUseCase(uow, audit).execute(user_id, church_id, day)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/calendar/{year}/{month}", status_code=status.HTTP_200_OK, response_model=VerseCalendarResponse
)
async def get_verse_calendar(
    church_id: UUID,
    year: int = Path(..., ge=2000, le=2100),
    month: int = Path(..., ge=1, le=12),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    use_case = GetVerseCalendarUseCase(uow, audit)
    result = await use_case.execute(user_id, church_id, year, month)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class SetThemeRequest(BaseModel):
    type: ThemeType
    theme: SanitizedStr = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date
    suggested_verses: List[SanitizedStr] = Field(default_factory=list, max_length=31)


@router.put("/settings/theme", status_code=status.HTTP_200_OK, response_model=SetThemeResponse)
async def set_theme(
    church_id: UUID,
    request: SetThemeRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    command = SetThemeCommand(church_id=church_id, **request.model_dump())
    result = await SetThemeUseCase(uow, audit).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class ToggleAutoGenerateRequest(BaseModel):
    enabled: bool
    preferred_version: BibleVersion = BibleVersion.NIV


@router.put(
    "/settings/auto-generate",
    status_code=status.HTTP_200_OK,
    response_model=ToggleAutoGenerateResponse,
)
async def toggle_auto_generate(
    church_id: UUID,
    request: ToggleAutoGenerateRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    use_case = ToggleAutoGenerateUseCase(uow, audit)
    result = await use_case.execute(
        user_id, church_id, request.enabled, request.preferred_version
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/settings", status_code=status.HTTP_200_OK, response_model=ChurchThemeResponse)
async def get_theme(
    church_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetThemeUseCase(uow, audit).execute(user_id, church_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{day}", status_code=status.HTTP_200_OK, response_model=GetVerseResponse)
async def get_verse(
    church_id: UUID,
    day: date,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Verse of one day; `verse` is null when none was saved"""
    result = await GetVerseUseCase(uow, audit).execute(user_id, church_id, day)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
