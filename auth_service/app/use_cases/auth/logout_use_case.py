"""
Logout Use Case

Ends a session by deleting its row. Idempotent.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.errors import StoreError
from .dtos import SessionActionResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """Deleting an already-deleted session succeeds with changed=False"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: str) -> Result[SessionActionResponse]:
        try:
            async with self.uow:
                deleted = await self.uow.sessions.delete(session_id)
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        if deleted:
            logger.info(f"Session {session_id} logged out")
        return Return.ok(SessionActionResponse(session_id=session_id, changed=deleted))
