from typing import Iterable, List, Optional

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import SessionInfo
from auth_service.domain.entities import SessionFilter, UserRole
from auth_service.domain.errors import StoreError


class ListSessionsUseCase:
    """
    Lists sessions for the caller, or for any user when the caller is admin.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requesting_user_id: str,
        requesting_roles: Iterable[str],
        user_id: Optional[str] = None,
        valid: Optional[bool] = None,
    ) -> Result[List[SessionInfo]]:
        is_admin = UserRole.admin.value in {r.lower() for r in requesting_roles}
        target_user_id = user_id or requesting_user_id

        if target_user_id != requesting_user_id and not is_admin:
            return Return.err(
                Error("FORBIDDEN", "Only admins can list other users' sessions")
            )

        try:
            async with self.uow:
                sessions = await self.uow.sessions.list(
                    SessionFilter(user_id=target_user_id, valid=valid)
                )
                return Return.ok([SessionInfo.from_entity(s) for s in sessions])
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))
