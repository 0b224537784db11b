from typing import List, Optional

from sqlmodel import col, delete, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.adapter.repositories.errors import store_errors
from auth_service.app.repositories.user_repository import IUserRepository
from auth_service.domain.entities import User, UserFilter


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        with store_errors("user lookup by email"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        with store_errors("user lookup"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        with store_errors("user create"):
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        with store_errors("user update"):
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def delete(self, user_id: str) -> bool:
        """Delete a user by ID"""
        stmt = delete(User).where(User.id == user_id)
        with store_errors("user delete"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def list(self, filters: Optional[UserFilter] = None) -> List[User]:
        """List users ordered by creation time"""
        stmt = select(User)
        if filters is not None:
            if filters.email:
                stmt = stmt.where(User.email == filters.email)
            if filters.role is not None:
                stmt = stmt.where(User.role == filters.role)
            if filters.search:
                pattern = f"%{filters.search}%"
                stmt = stmt.where(
                    or_(
                        col(User.username).ilike(pattern),
                        col(User.fullname).ilike(pattern),
                        col(User.email).ilike(pattern),
                    )
                )
        stmt = stmt.order_by(col(User.created_at))

        with store_errors("user list"):
            result = await self.session.exec(stmt)
            return list(result.all())
