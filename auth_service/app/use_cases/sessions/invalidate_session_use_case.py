"""
Invalidate Session Use Case

Marks a session invalid (valid=False) without deleting it.
"""

import logging
from typing import Iterable

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import SessionActionResponse
from auth_service.domain.entities import UserRole
from auth_service.domain.errors import StoreError

logger = logging.getLogger(__name__)


class InvalidateSessionUseCase:
    """
    Use case for revoking a single session.

    Business Rules:
    - Users can invalidate their own sessions
    - Admins can invalidate any session
    - Invalidating an already-invalid session succeeds (changed=False)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: str,
        requesting_user_id: str,
        requesting_roles: Iterable[str],
    ) -> Result[SessionActionResponse]:
        """
        Invalidate a specific session by ID.

        Args:
            session_id: Session to invalidate
            requesting_user_id: Caller's user id (token subject)
            requesting_roles: Caller's roles (token claims)

        Returns:
            Result with SessionActionResponse, or Error
        """
        is_admin = UserRole.admin.value in {r.lower() for r in requesting_roles}

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if session is None:
                    return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

                if session.user_id != requesting_user_id and not is_admin:
                    return Return.err(
                        Error("FORBIDDEN", "Only admins can invalidate other users' sessions")
                    )

                was_valid = session.valid
                if was_valid:
                    await self.uow.sessions.invalidate(session_id)
                    await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        if was_valid:
            logger.info(f"Session {session_id} invalidated by user {requesting_user_id}")
        return Return.ok(SessionActionResponse(session_id=session_id, changed=was_valid))
