"""
Event Use Cases

Church events and attendance.
"""

from .create_event_use_case import CreateEventUseCase
from .update_event_use_case import UpdateEventUseCase
from .delete_event_use_case import DeleteEventUseCase
from .list_events_use_case import ListEventsUseCase
from .get_event_use_case import GetEventUseCase
from .register_for_event_use_case import RegisterForEventUseCase
from .cancel_registration_use_case import CancelRegistrationUseCase
from .get_event_attendees_use_case import GetEventAttendeesUseCase
from .dtos import (
    AttendeeInfo,
    AttendeeListResponse,
    CreateEventCommand,
    EventInfo,
    EventListResponse,
    EventMessageResponse,
    UpdateEventCommand,
)

__all__ = [
    # Use Cases
    "CreateEventUseCase",
    "UpdateEventUseCase",
    "DeleteEventUseCase",
    "ListEventsUseCase",
    "GetEventUseCase",
    "RegisterForEventUseCase",
    "CancelRegistrationUseCase",
    "GetEventAttendeesUseCase",
    # DTOs
    "CreateEventCommand",
    "UpdateEventCommand",
    "EventInfo",
    "EventListResponse",
    "AttendeeInfo",
    "AttendeeListResponse",
    "EventMessageResponse",
]
