from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.church_repository import IChurchRepository
from congregation.domain.entities import Church
from congregation.domain.exceptions import DuplicateChurchCodeError


class ChurchRepository(IChurchRepository):
    """Church repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, church_id: UUID) -> Optional[Church]:
        """Get church by ID"""
        stmt = select(Church).where(Church.id == church_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_code(self, code: str) -> Optional[Church]:
        stmt = select(Church).where(Church.code == code, Church.is_active == True)
        result = await self.session.exec(stmt)
        return result.first()

    async def code_exists(self, code: str) -> bool:
        stmt = select(Church.id).where(Church.code == code).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, church: Church) -> Church:
        """
        Create a new church

        The unique index on code is the final arbiter when two creations draw
        the same code concurrently.
        """
        self.session.add(church)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if "code" in str(e.orig):
                raise DuplicateChurchCodeError(church.code) from e
            raise
        await self.session.refresh(church)
        return church

    async def update(self, church: Church) -> Church:
        """Update existing church"""
        self.session.add(church)
        await self.session.flush()
        await self.session.refresh(church)
        return church

    async def count_active(self) -> int:
        stmt = select(func.count()).select_from(Church).where(Church.is_active == True)
        result = await self.session.exec(stmt)
        return result.one()

    async def list_recent(self, limit: int) -> List[Church]:
        stmt = select(Church).order_by(Church.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())
