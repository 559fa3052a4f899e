from datetime import datetime
from typing import Optional

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from congregation.app.repositories.audit_entry_repository import IAuditEntryRepository
from congregation.domain.entities import AuditEntry


class AuditEntryRepository(IAuditEntryRepository):
    """AuditEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def delete_older_than(self, cutoff: datetime, limit: Optional[int] = None) -> int:
        # DELETE ... LIMIT is not portable; select the oldest ids first
        id_stmt = (
            select(AuditEntry.id)
            .where(AuditEntry.created_at < cutoff)
            .order_by(AuditEntry.created_at)
        )
        if limit is not None:
            id_stmt = id_stmt.limit(limit)
        ids = list((await self.session.exec(id_stmt)).all())
        if not ids:
            return 0

        result = await self.session.execute(delete(AuditEntry).where(AuditEntry.id.in_(ids)))
        await self.session.flush()
        return result.rowcount
