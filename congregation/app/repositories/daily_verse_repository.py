from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import ChurchTheme, DailyVerse


class IDailyVerseRepository(ABC):
    """DailyVerse repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, verse_id: str) -> Optional[DailyVerse]:
        """Get verse by its "{church_id}_{date}" ID"""
        pass

    @abstractmethod
    async def save(self, verse: DailyVerse) -> DailyVerse:
        """Insert or update a verse"""
        pass

    @abstractmethod
    async def delete(self, verse: DailyVerse) -> None:
        """Delete a verse"""
        pass

    @abstractmethod
    async def list_between(
        self, church_id: UUID, start_date: str, end_date: str
    ) -> List[DailyVerse]:
        """Verses of a church whose date lies in [start_date, end_date]"""
        pass


class IChurchThemeRepository(ABC):
    """ChurchTheme repository interface - application layer"""

    @abstractmethod
    async def get(self, church_id: UUID) -> Optional[ChurchTheme]:
        """Get theme settings of a church"""
        pass

    @abstractmethod
    async def save(self, theme: ChurchTheme) -> ChurchTheme:
        """Insert or update theme settings"""
        pass
