from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.church_member_repository import IChurchMemberRepository
from congregation.domain.entities import ChurchMember
from congregation.domain.exceptions import DuplicateChurchMemberError


class ChurchMemberRepository(IChurchMemberRepository):
    """ChurchMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, church_id: UUID, user_id: UUID) -> Optional[ChurchMember]:
        stmt = select(ChurchMember).where(
            ChurchMember.church_id == church_id, ChurchMember.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, member: ChurchMember) -> ChurchMember:
        """The (church_id, user_id) unique index rejects a concurrent duplicate join"""
        self.session.add(member)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateChurchMemberError(member.church_id, member.user_id) from e
        await self.session.refresh(member)
        return member

    async def update(self, member: ChurchMember) -> ChurchMember:
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def list_active(self, church_id: UUID, limit: int) -> List[ChurchMember]:
        stmt = (
            select(ChurchMember)
            .where(ChurchMember.church_id == church_id, ChurchMember.is_active == True)
            .order_by(ChurchMember.joined_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
