from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from congregation.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user

        Raises:
            DuplicateEmailError: email is already registered
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Hard delete a user record"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users"""
        pass

    @abstractmethod
    async def list_created_at(self) -> List[datetime]:
        """Creation timestamps of all users, for aggregate growth statistics"""
        pass
