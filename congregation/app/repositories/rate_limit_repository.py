from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from congregation.domain.entities import RateLimitRecord


class IRateLimitRepository(ABC):
    """RateLimitRecord repository interface - application layer"""

    @abstractmethod
    async def get(self, key: str) -> Optional[RateLimitRecord]:
        """Get the record of a key"""
        pass

    @abstractmethod
    async def insert_if_absent(self, record: RateLimitRecord) -> bool:
        """
        Insert a first record for a key.

        Returns:
            False when another writer created the key first
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self, key: str, expected_version: int, requests: List[int]
    ) -> bool:
        """
        Replace the request log of a key if its version is still expected_version.

        The version is incremented on success.

        Returns:
            False when the record changed since it was read
        """
        pass

    @abstractmethod
    async def delete_inactive(self, cutoff: datetime) -> int:
        """Delete records whose updated_at is before cutoff, returning the number deleted"""
        pass
