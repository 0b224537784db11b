from abc import ABC, abstractmethod
from typing import List, Optional

from auth_service.domain.entities import Session, SessionFilter, SessionPatch


class ISessionRepository(ABC):
    """
    Session repository interface - application layer

    Adapters raise StoreError(IO_FAILURE) on storage failures.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Get session by ID; None when no such session exists"""
        pass

    @abstractmethod
    async def invalidate(self, session_id: str) -> bool:
        """Set valid=False. Returns True if the session exists."""
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Hard delete. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: str) -> int:
        """Hard delete every session of a user. Returns count removed."""
        pass

    @abstractmethod
    async def update(self, session_id: str, patch: SessionPatch) -> Session:
        """
        Merge the non-empty patch fields into the session.

        Raises StoreError(NOT_FOUND) if the session does not exist.
        """
        pass

    @abstractmethod
    async def rotate(
        self, session_id: str, expected_refresh_token_hash: str, patch: SessionPatch
    ) -> Optional[Session]:
        """
        Compare-and-swap update used by refresh rotation.

        Applies the patch only while the session is valid and its
        refresh_token_hash still equals the expected value. Returns the
        updated session, or None when the precondition no longer holds.
        """
        pass

    @abstractmethod
    async def list(self, filters: Optional[SessionFilter] = None) -> List[Session]:
        """List sessions matching the filter"""
        pass
