from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.adapter.repositories.announcement_repository import AnnouncementRepository
from congregation.adapter.repositories.audit_entry_repository import AuditEntryRepository
from congregation.adapter.repositories.church_member_repository import ChurchMemberRepository
from congregation.adapter.repositories.church_repository import ChurchRepository
from congregation.adapter.repositories.daily_verse_repository import (
    ChurchThemeRepository,
    DailyVerseRepository,
)
from congregation.adapter.repositories.event_repository import (
    EventAttendeeRepository,
    EventRepository,
)
from congregation.adapter.repositories.prayer_repository import (
    PrayerRepository,
    PrayerSupporterRepository,
)
from congregation.adapter.repositories.rate_limit_repository import RateLimitRepository
from congregation.adapter.repositories.subscription_repository import SubscriptionRepository
from congregation.adapter.repositories.user_repository import UserRepository
from congregation.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern

    With owns_session=True the session is closed on exit; the factory used by
    the audit recorder and rate limiter creates such units of work.

    Exit always rolls back, which expires every instance loaded in an open
    transaction. Build response DTOs inside the `async with` block.
    """

    def __init__(self, session: AsyncSession, owns_session: bool = False):
        self.session = session
        self.owns_session = owns_session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.churches = ChurchRepository(self.session)
        self.church_members = ChurchMemberRepository(self.session)
        self.announcements = AnnouncementRepository(self.session)
        self.events = EventRepository(self.session)
        self.event_attendees = EventAttendeeRepository(self.session)
        self.prayers = PrayerRepository(self.session)
        self.prayer_supporters = PrayerSupporterRepository(self.session)
        self.daily_verses = DailyVerseRepository(self.session)
        self.church_themes = ChurchThemeRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.audit_entries = AuditEntryRepository(self.session)
        self.rate_limits = RateLimitRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        if self.owns_session:
            await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
