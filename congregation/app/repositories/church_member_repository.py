from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import ChurchMember


class IChurchMemberRepository(ABC):
    """ChurchMember repository interface - application layer"""

    @abstractmethod
    async def get(self, church_id: UUID, user_id: UUID) -> Optional[ChurchMember]:
        """Get the membership row of a user in a church, active or not"""
        pass

    @abstractmethod
    async def create(self, member: ChurchMember) -> ChurchMember:
        """Create a new membership row"""
        pass

    @abstractmethod
    async def update(self, member: ChurchMember) -> ChurchMember:
        """Update existing membership row"""
        pass

    @abstractmethod
    async def list_active(self, church_id: UUID, limit: int) -> List[ChurchMember]:
        """Active members of a church ordered by joined_at DESC"""
        pass
