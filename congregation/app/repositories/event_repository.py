from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import Event, EventAttendee


class IEventRepository(ABC):
    """Event repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        """Get event by ID"""
        pass

    @abstractmethod
    async def create(self, event: Event) -> Event:
        """Create a new event"""
        pass

    @abstractmethod
    async def update(self, event: Event) -> Event:
        """Update existing event"""
        pass

    @abstractmethod
    async def delete(self, event: Event) -> None:
        """Delete an event"""
        pass

    @abstractmethod
    async def list_by_church(
        self, church_id: UUID, only_published: bool, limit: int
    ) -> List[Event]:
        """Events of a church ordered by start_date DESC"""
        pass


class IEventAttendeeRepository(ABC):
    """EventAttendee repository interface - application layer"""

    @abstractmethod
    async def get(self, event_id: UUID, user_id: UUID) -> Optional[EventAttendee]:
        """Get the registration of a user for an event"""
        pass

    @abstractmethod
    async def create(self, attendee: EventAttendee) -> EventAttendee:
        """Register a user for an event"""
        pass

    @abstractmethod
    async def delete(self, attendee: EventAttendee) -> None:
        """Delete one registration"""
        pass

    @abstractmethod
    async def list_by_event(self, event_id: UUID) -> List[EventAttendee]:
        """Registrations of an event ordered by registered_at DESC"""
        pass

    @abstractmethod
    async def delete_by_event(self, event_id: UUID) -> int:
        """Delete every registration of an event, returning the number deleted"""
        pass
