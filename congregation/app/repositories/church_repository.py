from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import Church


class IChurchRepository(ABC):
    """Church repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, church_id: UUID) -> Optional[Church]:
        """Get church by ID"""
        pass

    @abstractmethod
    async def get_active_by_code(self, code: str) -> Optional[Church]:
        """Get an active church by its 8-character join code"""
        pass

    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        """Check whether any church (active or not) already uses the code"""
        pass

    @abstractmethod
    async def create(self, church: Church) -> Church:
        """
        Create a new church

        Raises:
            DuplicateChurchCodeError: the code was taken concurrently
        """
        pass

    @abstractmethod
    async def update(self, church: Church) -> Church:
        """Update existing church"""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count churches with is_active=True"""
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[Church]:
        """Churches ordered by created_at DESC"""
        pass
