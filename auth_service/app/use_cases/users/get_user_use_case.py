from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.errors import StoreError


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[UserInfo]:
        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))
                return Return.ok(UserInfo.from_entity(user))
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))
