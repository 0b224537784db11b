from typing import List, Optional

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.entities import UserFilter
from auth_service.domain.errors import StoreError


class ListUsersUseCase:
    """Admin listing of users with optional email/role/search filters"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, filters: Optional[UserFilter] = None) -> Result[List[UserInfo]]:
        try:
            async with self.uow:
                users = await self.uow.users.list(filters)
                # Converted inside the unit of work; exit expires loaded rows
                return Return.ok([UserInfo.from_entity(u) for u in users])
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))
