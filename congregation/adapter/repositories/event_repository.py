from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.event_repository import (
    IEventAttendeeRepository,
    IEventRepository,
)
from congregation.domain.entities import Event, EventAttendee
from congregation.domain.exceptions import DuplicateEventRegistrationError


class EventRepository(IEventRepository):
    """Event repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        stmt = select(Event).where(Event.id == event_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, event: Event) -> Event:
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def update(self, event: Event) -> Event:
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def delete(self, event: Event) -> None:
        await self.session.delete(event)
        await self.session.flush()

    async def list_by_church(
        self, church_id: UUID, only_published: bool, limit: int
    ) -> List[Event]:
        stmt = select(Event).where(Event.church_id == church_id)
        if only_published:
            stmt = stmt.where(Event.is_published == True)
        stmt = stmt.order_by(Event.start_date.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())


class EventAttendeeRepository(IEventAttendeeRepository):
    """EventAttendee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, event_id: UUID, user_id: UUID) -> Optional[EventAttendee]:
        stmt = select(EventAttendee).where(
            EventAttendee.event_id == event_id, EventAttendee.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, attendee: EventAttendee) -> EventAttendee:
        self.session.add(attendee)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateEventRegistrationError(attendee.event_id, attendee.user_id) from e
        await self.session.refresh(attendee)
        return attendee

    async def delete(self, attendee: EventAttendee) -> None:
        await self.session.delete(attendee)
        await self.session.flush()

    async def list_by_event(self, event_id: UUID) -> List[EventAttendee]:
        stmt = (
            select(EventAttendee)
            .where(EventAttendee.event_id == event_id)
            .order_by(EventAttendee.registered_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_by_event(self, event_id: UUID) -> int:
        stmt = delete(EventAttendee).where(EventAttendee.event_id == event_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
