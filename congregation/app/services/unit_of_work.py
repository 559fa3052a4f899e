from abc import ABC, abstractmethod
from typing import Callable

from congregation.app.repositories.announcement_repository import IAnnouncementRepository
from congregation.app.repositories.audit_entry_repository import IAuditEntryRepository
from congregation.app.repositories.church_member_repository import IChurchMemberRepository
from congregation.app.repositories.church_repository import IChurchRepository
from congregation.app.repositories.daily_verse_repository import (
    IChurchThemeRepository,
    IDailyVerseRepository,
)
from congregation.app.repositories.event_repository import (
    IEventAttendeeRepository,
    IEventRepository,
)
from congregation.app.repositories.prayer_repository import (
    IPrayerRepository,
    IPrayerSupporterRepository,
)
from congregation.app.repositories.rate_limit_repository import IRateLimitRepository
from congregation.app.repositories.subscription_repository import ISubscriptionRepository
from congregation.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    churches: IChurchRepository
    church_members: IChurchMemberRepository
    announcements: IAnnouncementRepository
    events: IEventRepository
    event_attendees: IEventAttendeeRepository
    prayers: IPrayerRepository
    prayer_supporters: IPrayerSupporterRepository
    daily_verses: IDailyVerseRepository
    church_themes: IChurchThemeRepository
    subscriptions: ISubscriptionRepository
    audit_entries: IAuditEntryRepository
    rate_limits: IRateLimitRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


# Zero-argument callable returning a fresh UnitOfWork with its own session.
# Used by components whose writes must not share the request transaction.
UnitOfWorkFactory = Callable[[], UnitOfWork]
