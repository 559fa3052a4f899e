from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.events import (
    AttendeeListResponse,
    CancelRegistrationUseCase,
    CreateEventCommand,
    CreateEventUseCase,
    DeleteEventUseCase,
    EventInfo,
    EventListResponse,
    EventMessageResponse,
    GetEventAttendeesUseCase,
    GetEventUseCase,
    ListEventsUseCase,
    RegisterForEventUseCase,
    UpdateEventCommand,
    UpdateEventUseCase,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.domain.entities import EventCategory
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/events", tags=["Events"])


class CreateEventRequest(BaseModel):
    title: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: SanitizedStr = Field(..., max_length=5000)
    location: Optional[SanitizedStr] = Field(None, max_length=500)
    start_date: datetime
    end_date: datetime
    category: EventCategory = EventCategory.other
    max_attendees: Optional[int] = Field(None, ge=1)
    is_published: bool = False


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EventInfo)
async def create_event(
    request: CreateEventRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Create Event in the caller's church

    Raises:
        - 400 Bad Request: Caller has no church, or end_date is not after start_date
        - 403 Forbidden: Caller is not pastor or admin
    """
    command = CreateEventCommand(**request.model_dump())
    result = await CreateEventUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdateEventRequest(BaseModel):
    title: Optional[SanitizedStr] = Field(None, min_length=1, max_length=200)
    description: Optional[SanitizedStr] = Field(None, max_length=5000)
    location: Optional[SanitizedStr] = Field(None, max_length=500)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[EventCategory] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    is_published: Optional[bool] = None


@router.patch("/{event_id}", status_code=status.HTTP_200_OK, response_model=EventInfo)
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    command = UpdateEventCommand(
        event_id=event_id, changes=request.model_dump(exclude_unset=True, exclude_none=True)
    )
    result = await UpdateEventUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{event_id}", status_code=status.HTTP_200_OK, response_model=EventMessageResponse)
async def delete_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await DeleteEventUseCase(uow, audit).execute(user_id, event_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=EventListResponse)
async def list_events(
    limit: int = Query(20, ge=1, le=100),
    only_published: bool = Query(True),
    upcoming: bool = Query(False),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    use_case = ListEventsUseCase(uow, audit)
    result = await use_case.execute(user_id, limit, only_published, upcoming)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{event_id}", status_code=status.HTTP_200_OK, response_model=EventInfo)
async def get_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetEventUseCase(uow, audit).execute(user_id, event_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{event_id}/register", status_code=status.HTTP_200_OK, response_model=EventMessageResponse
)
async def register_for_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Register for Event

    Raises:
        - 403 Forbidden: Event belongs to another church
        - 409 Conflict: Already registered
        - 429 Too Many Requests: Event is full
    """
    result = await RegisterForEventUseCase(uow, audit).execute(user_id, event_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{event_id}/register", status_code=status.HTTP_200_OK, response_model=EventMessageResponse
)
async def cancel_registration(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await CancelRegistrationUseCase(uow, audit).execute(user_id, event_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{event_id}/attendees", status_code=status.HTTP_200_OK, response_model=AttendeeListResponse
)
async def get_event_attendees(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetEventAttendeesUseCase(uow, audit).execute(user_id, event_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
