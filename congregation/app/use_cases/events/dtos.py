"""
Event Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import AttendeeStatus, EventCategory


class CreateEventCommand(BaseModel):
    title: str
    description: str
    location: Optional[str] = None
    start_date: datetime
    end_date: datetime
    category: EventCategory = EventCategory.other
    max_attendees: Optional[int] = None
    is_published: bool = False


class UpdateEventCommand(BaseModel):
    """Only the fields present in `changes` are written"""

    event_id: UUID
    changes: Dict[str, Any]


class EventInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    church_id: UUID
    title: str
    description: str
    location: Optional[str] = None
    start_date: datetime
    end_date: datetime
    organizer: str
    organizer_id: UUID
    category: EventCategory
    max_attendees: Optional[int] = None
    current_attendees: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class EventListResponse(BaseModel):
    events: List[EventInfo]


class AttendeeInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    user_name: str
    status: AttendeeStatus
    registered_at: datetime


class AttendeeListResponse(BaseModel):
    attendees: List[AttendeeInfo]


class EventMessageResponse(BaseModel):
    message: str
