"""
Get Me Use Case

Resolves the caller's session to the owning user.
"""

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.errors import StoreError
from .dtos import UserInfo
from .validate_session_use_case import SESSION_NOT_FOUND, find_active_session


class GetMeUseCase:
    """
    Use case for the "who am I" query.

    Business Rules:
    - The session named by the access token's SID must still be live
    - SESSION_NOT_FOUND and USER_NOT_FOUND stay distinct for the API layer
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: str) -> Result[UserInfo]:
        """
        Execute get me use case.

        Args:
            session_id: SID taken from a verified access token

        Returns:
            Result with UserInfo, or Error(SESSION_NOT_FOUND | USER_NOT_FOUND)
        """
        try:
            async with self.uow:
                session = await find_active_session(self.uow.sessions, session_id)
                if session is None:
                    return Return.err(SESSION_NOT_FOUND)

                user = await self.uow.users.get_by_id(session.user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))
                return Return.ok(UserInfo.from_entity(user))
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))
