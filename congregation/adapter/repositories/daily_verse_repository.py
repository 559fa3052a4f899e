from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.daily_verse_repository import (
    IChurchThemeRepository,
    IDailyVerseRepository,
)
from congregation.domain.entities import ChurchTheme, DailyVerse


class DailyVerseRepository(IDailyVerseRepository):
    """DailyVerse repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, verse_id: str) -> Optional[DailyVerse]:
        stmt = select(DailyVerse).where(DailyVerse.id == verse_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, verse: DailyVerse) -> DailyVerse:
        self.session.add(verse)
        await self.session.flush()
        await self.session.refresh(verse)
        return verse

    async def delete(self, verse: DailyVerse) -> None:
        await self.session.delete(verse)
        await self.session.flush()

    async def list_between(
        self, church_id: UUID, start_date: str, end_date: str
    ) -> List[DailyVerse]:
        # Dates are zero-padded YYYY-MM-DD strings, so string order is date order
        stmt = (
            select(DailyVerse)
            .where(
                DailyVerse.church_id == church_id,
                DailyVerse.date >= start_date,
                DailyVerse.date <= end_date,
            )
            .order_by(DailyVerse.date)
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class ChurchThemeRepository(IChurchThemeRepository):
    """ChurchTheme repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, church_id: UUID) -> Optional[ChurchTheme]:
        stmt = select(ChurchTheme).where(ChurchTheme.church_id == church_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, theme: ChurchTheme) -> ChurchTheme:
        self.session.add(theme)
        await self.session.flush()
        await self.session.refresh(theme)
        return theme
