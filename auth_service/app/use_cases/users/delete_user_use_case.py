"""
Delete User Use Case

Removes a user together with every session they own.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.errors import StoreError

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Business Rules:
    - Sessions are deleted first so no refresh token outlives its user
    - Both deletes commit atomically
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[dict]:
        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                session_count = await self.uow.sessions.delete_by_user_id(user_id)
                await self.uow.users.delete(user_id)
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        logger.info(f"Deleted user {user_id} and {session_count} session(s)")
        return Return.ok({"user_id": user_id, "deleted_sessions": session_count})
