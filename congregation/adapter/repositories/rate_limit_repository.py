from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.rate_limit_repository import IRateLimitRepository
from congregation.domain.base import utcnow
from congregation.domain.entities import RateLimitRecord


class RateLimitRepository(IRateLimitRepository):
    """
    RateLimitRecord repository implementation using SQLModel.

    Meant for a session dedicated to one rate-limit check: a failed insert
    rolls that session back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Optional[RateLimitRecord]:
        stmt = select(RateLimitRecord).where(RateLimitRecord.key == key)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def insert_if_absent(self, record: RateLimitRecord) -> bool:
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def compare_and_set(
        self, key: str, expected_version: int, requests: List[int]
    ) -> bool:
        stmt = (
            update(RateLimitRecord)
            .where(
                RateLimitRecord.key == key,
                RateLimitRecord.version == expected_version,
            )
            .values(
                requests=requests,
                version=expected_version + 1,
                updated_at=utcnow(),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_inactive(self, cutoff: datetime) -> int:
        stmt = delete(RateLimitRecord).where(RateLimitRecord.updated_at < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
