from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.announcement_repository import IAnnouncementRepository
from congregation.domain.entities import Announcement


class AnnouncementRepository(IAnnouncementRepository):
    """Announcement repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, announcement_id: UUID) -> Optional[Announcement]:
        stmt = select(Announcement).where(Announcement.id == announcement_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, announcement: Announcement) -> Announcement:
        self.session.add(announcement)
        await self.session.flush()
        await self.session.refresh(announcement)
        return announcement

    async def update(self, announcement: Announcement) -> Announcement:
        self.session.add(announcement)
        await self.session.flush()
        await self.session.refresh(announcement)
        return announcement

    async def delete(self, announcement: Announcement) -> None:
        await self.session.delete(announcement)
        await self.session.flush()

    async def list_by_church(
        self, church_id: UUID, only_published: bool, limit: int
    ) -> List[Announcement]:
        stmt = select(Announcement).where(Announcement.church_id == church_id)
        if only_published:
            stmt = stmt.where(Announcement.is_published == True)
        stmt = stmt.order_by(Announcement.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())
