from uuid import uuid4

import pytest

from congregation.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from congregation.domain.entities import ChurchMember, EventAttendee, PrayerSupporter
from congregation.domain.exceptions import (
    DuplicateChurchMemberError,
    DuplicateEventRegistrationError,
    DuplicatePrayerSupporterError,
)


async def _insert_twice(session_factory, repository, make_row):
    """Commit one row, then insert a second row with the same pair in a fresh session"""
    async with session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            await getattr(uow, repository).create(make_row())
            await uow.commit()

    async with session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            await getattr(uow, repository).create(make_row())


@pytest.mark.asyncio
async def test_duplicate_membership_is_translated(session_factory):
    church_id, user_id = uuid4(), uuid4()

    with pytest.raises(DuplicateChurchMemberError) as raised:
        await _insert_twice(
            session_factory,
            "church_members",
            lambda: ChurchMember(church_id=church_id, user_id=user_id),
        )

    assert raised.value.church_id == church_id
    assert raised.value.user_id == user_id


@pytest.mark.asyncio
async def test_duplicate_event_registration_is_translated(session_factory):
    event_id, user_id = uuid4(), uuid4()

    with pytest.raises(DuplicateEventRegistrationError):
        await _insert_twice(
            session_factory,
            "event_attendees",
            lambda: EventAttendee(event_id=event_id, user_id=user_id),
        )


@pytest.mark.asyncio
async def test_duplicate_prayer_supporter_is_translated(session_factory):
    prayer_id, user_id = uuid4(), uuid4()

    with pytest.raises(DuplicatePrayerSupporterError):
        await _insert_twice(
            session_factory,
            "prayer_supporters",
            lambda: PrayerSupporter(prayer_id=prayer_id, user_id=user_id),
        )
