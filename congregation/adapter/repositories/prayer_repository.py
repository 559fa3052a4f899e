from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.prayer_repository import (
    IPrayerRepository,
    IPrayerSupporterRepository,
)
from congregation.domain.entities import Prayer, PrayerSupporter, PrayerVisibility
from congregation.domain.exceptions import DuplicatePrayerSupporterError


class PrayerRepository(IPrayerRepository):
    """Prayer repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, prayer_id: UUID) -> Optional[Prayer]:
        stmt = select(Prayer).where(Prayer.id == prayer_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, prayer: Prayer) -> Prayer:
        self.session.add(prayer)
        await self.session.flush()
        await self.session.refresh(prayer)
        return prayer

    async def update(self, prayer: Prayer) -> Prayer:
        self.session.add(prayer)
        await self.session.flush()
        await self.session.refresh(prayer)
        return prayer

    async def delete(self, prayer: Prayer) -> None:
        await self.session.delete(prayer)
        await self.session.flush()

    async def list_public(self, limit: int) -> List[Prayer]:
        stmt = (
            select(Prayer)
            .where(Prayer.visibility == PrayerVisibility.public)
            .order_by(Prayer.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_for_church(self, church_id: UUID, limit: int) -> List[Prayer]:
        stmt = (
            select(Prayer)
            .where(
                Prayer.visibility == PrayerVisibility.church,
                Prayer.church_id == church_id,
            )
            .order_by(Prayer.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_user(self, user_id: UUID, limit: int) -> List[Prayer]:
        stmt = (
            select(Prayer)
            .where(Prayer.user_id == user_id)
            .order_by(Prayer.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class PrayerSupporterRepository(IPrayerSupporterRepository):
    """PrayerSupporter repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, prayer_id: UUID, user_id: UUID) -> Optional[PrayerSupporter]:
        stmt = select(PrayerSupporter).where(
            PrayerSupporter.prayer_id == prayer_id, PrayerSupporter.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, supporter: PrayerSupporter) -> PrayerSupporter:
        self.session.add(supporter)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicatePrayerSupporterError(supporter.prayer_id, supporter.user_id) from e
        await self.session.refresh(supporter)
        return supporter

    async def update(self, supporter: PrayerSupporter) -> PrayerSupporter:
        self.session.add(supporter)
        await self.session.flush()
        await self.session.refresh(supporter)
        return supporter

    async def list_by_prayer(self, prayer_id: UUID) -> List[PrayerSupporter]:
        stmt = (
            select(PrayerSupporter)
            .where(PrayerSupporter.prayer_id == prayer_id)
            .order_by(PrayerSupporter.prayed_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_by_prayer(self, prayer_id: UUID) -> int:
        stmt = delete(PrayerSupporter).where(PrayerSupporter.prayer_id == prayer_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
