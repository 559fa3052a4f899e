from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import Prayer, PrayerSupporter


class IPrayerRepository(ABC):
    """Prayer repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, prayer_id: UUID) -> Optional[Prayer]:
        """Get prayer by ID"""
        pass

    @abstractmethod
    async def create(self, prayer: Prayer) -> Prayer:
        """Create a new prayer"""
        pass

    @abstractmethod
    async def update(self, prayer: Prayer) -> Prayer:
        """Update existing prayer"""
        pass

    @abstractmethod
    async def delete(self, prayer: Prayer) -> None:
        """Delete a prayer"""
        pass

    @abstractmethod
    async def list_public(self, limit: int) -> List[Prayer]:
        """Public prayers ordered by created_at DESC"""
        pass

    @abstractmethod
    async def list_for_church(self, church_id: UUID, limit: int) -> List[Prayer]:
        """Church-visible prayers of a church ordered by created_at DESC"""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UUID, limit: int) -> List[Prayer]:
        """All prayers of one user ordered by created_at DESC"""
        pass


class IPrayerSupporterRepository(ABC):
    """PrayerSupporter repository interface - application layer"""

    @abstractmethod
    async def get(self, prayer_id: UUID, user_id: UUID) -> Optional[PrayerSupporter]:
        """Get the supporter row of a user for a prayer"""
        pass

    @abstractmethod
    async def create(self, supporter: PrayerSupporter) -> PrayerSupporter:
        """Create a new supporter row"""
        pass

    @abstractmethod
    async def update(self, supporter: PrayerSupporter) -> PrayerSupporter:
        """Update existing supporter row"""
        pass

    @abstractmethod
    async def list_by_prayer(self, prayer_id: UUID) -> List[PrayerSupporter]:
        """Supporters of a prayer ordered by prayed_at DESC"""
        pass

    @abstractmethod
    async def delete_by_prayer(self, prayer_id: UUID) -> int:
        """Delete every supporter row of a prayer, returning the number deleted"""
        pass
