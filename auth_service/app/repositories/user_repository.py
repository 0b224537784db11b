from abc import ABC, abstractmethod
from typing import List, Optional

from auth_service.domain.entities import User, UserFilter


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete user. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def list(self, filters: Optional[UserFilter] = None) -> List[User]:
        """List users matching the filter"""
        pass
