"""
Event and EventAttendee Entities
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AttendeeStatus, EventCategory


class Event(SQLModel, table=True):
    """
    Event entity - a scheduled church gathering.

    Business Rules:
    - end_date must be after start_date
    - current_attendees tracks registrations; max_attendees=None means unlimited
    - Deleting an event deletes its attendees
    """

    __tablename__ = "events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)

    title: str = Field(max_length=200)
    description: str = Field(max_length=5000)
    location: Optional[str] = Field(default=None, max_length=500)

    start_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    end_date: datetime = Field(sa_column=Column(DateTime, nullable=False))

    organizer: str = Field(default="Unknown", max_length=100)
    organizer_id: UUID = Field(nullable=False)
    category: EventCategory = Field(default=EventCategory.other)

    max_attendees: Optional[int] = Field(default=None)
    current_attendees: int = Field(default=0)
    is_published: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_event_church_published", "church_id", "is_published"),)


class EventAttendee(SQLModel, table=True):
    """Registration of one user for one event"""

    __tablename__ = "event_attendees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="events.id", nullable=False, index=True)
    user_id: UUID = Field(nullable=False)
    user_name: str = Field(default="Unknown", max_length=100)
    status: AttendeeStatus = Field(default=AttendeeStatus.registered)

    registered_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_event_attendee_event_user", "event_id", "user_id", unique=True),
    )
