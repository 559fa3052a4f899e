from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from congregation.domain.entities import AuditEntry


class IAuditEntryRepository(ABC):
    """AuditEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry (immutable)"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime, limit: Optional[int] = None) -> int:
        """
        Delete the oldest entries created before cutoff.

        Args:
            cutoff: entries with created_at < cutoff are eligible
            limit: maximum number of rows to delete, None for all

        Returns:
            Number of deleted entries
        """
        pass
