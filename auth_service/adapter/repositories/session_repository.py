from typing import List, Optional

from sqlmodel import col, delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.adapter.repositories.errors import store_errors
from auth_service.app.repositories.session_repository import ISessionRepository
from auth_service.domain.entities import Session, SessionFilter, SessionPatch
from auth_service.domain.errors import StoreError, StoreErrorKind


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        with store_errors("session create"):
            self.session.add(session_obj)
            await self.session.flush()
            await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Get session by ID"""
        stmt = (
            select(Session)
            .where(Session.id == session_id)
            .execution_options(populate_existing=True)
        )
        with store_errors("session lookup"):
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def invalidate(self, session_id: str) -> bool:
        """Mark a session invalid without deleting it"""
        stmt = update(Session).where(Session.id == session_id).values(valid=False)
        with store_errors("session invalidate"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def delete(self, session_id: str) -> bool:
        """Hard delete a session"""
        stmt = delete(Session).where(Session.id == session_id)
        with store_errors("session delete"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def delete_by_user_id(self, user_id: str) -> int:
        """Hard delete all sessions of a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        with store_errors("session delete by user"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount

    async def update(self, session_id: str, patch: SessionPatch) -> Session:
        """Partial merge: only the fields present in the patch are written"""
        changes = patch.changes()
        if changes:
            stmt = update(Session).where(Session.id == session_id).values(**changes)
            with store_errors("session update"):
                await self.session.execute(stmt)
                await self.session.flush()

        updated = await self.get_by_id(session_id)
        if updated is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, "session not found")
        return updated

    async def rotate(
        self, session_id: str, expected_refresh_token_hash: str, patch: SessionPatch
    ) -> Optional[Session]:
        """
        Conditional update keyed on the refresh hash read by the caller.

        Two refreshes racing on one session both read the same hash; only the
        first UPDATE matches it, the second affects zero rows.
        """
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.refresh_token_hash == expected_refresh_token_hash,
                Session.valid == True,  # noqa: E712
            )
            .values(**patch.changes())
        )
        with store_errors("session rotate"):
            result = await self.session.execute(stmt)
            await self.session.flush()

        if result.rowcount == 0:
            return None
        return await self.get_by_id(session_id)

    async def list(self, filters: Optional[SessionFilter] = None) -> List[Session]:
        """List sessions, newest first"""
        stmt = select(Session)
        if filters is not None:
            if filters.user_id is not None:
                stmt = stmt.where(Session.user_id == filters.user_id)
            if filters.valid is not None:
                stmt = stmt.where(Session.valid == filters.valid)
        stmt = stmt.order_by(col(Session.created_at).desc())

        with store_errors("session list"):
            result = await self.session.exec(stmt)
            return list(result.all())
