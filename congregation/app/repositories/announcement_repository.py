from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import Announcement


class IAnnouncementRepository(ABC):
    """Announcement repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, announcement_id: UUID) -> Optional[Announcement]:
        """Get announcement by ID"""
        pass

    @abstractmethod
    async def create(self, announcement: Announcement) -> Announcement:
        """Create a new announcement"""
        pass

    @abstractmethod
    async def update(self, announcement: Announcement) -> Announcement:
        """Update existing announcement"""
        pass

    @abstractmethod
    async def delete(self, announcement: Announcement) -> None:
        """Delete an announcement"""
        pass

    @abstractmethod
    async def list_by_church(
        self, church_id: UUID, only_published: bool, limit: int
    ) -> List[Announcement]:
        """Announcements of a church ordered by created_at DESC"""
        pass
