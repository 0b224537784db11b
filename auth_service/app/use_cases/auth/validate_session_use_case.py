"""
Validate Session Use Case

Resolves a session id to a live session.
"""

from typing import Optional

from libs.result import Error, Result, Return
from auth_service.app.repositories.session_repository import ISessionRepository
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import Session
from auth_service.domain.errors import StoreError
from .dtos import SessionInfo

SESSION_NOT_FOUND = Error("SESSION_NOT_FOUND", "Session not found")


async def find_active_session(
    sessions: ISessionRepository, session_id: str
) -> Optional[Session]:
    """Session by id, or None if missing, invalidated or expired"""
    if not session_id:
        return None
    session = await sessions.get_by_id(session_id)
    if session is None or not session.is_active(utcnow()):
        return None
    return session


class ValidateSessionUseCase:
    """Looks up a session by id; invalidated or expired sessions count as absent"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: str) -> Result[SessionInfo]:
        try:
            async with self.uow:
                session = await find_active_session(self.uow.sessions, session_id)
                if session is None:
                    return Return.err(SESSION_NOT_FOUND)
                return Return.ok(SessionInfo.from_entity(session))
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))
