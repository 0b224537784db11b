"""
Update User Use Case

Partial profile update. A new password is re-hashed; existing sessions are
left alone.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.base import utcnow
from auth_service.domain.errors import StoreError
from .dtos import UpdateUserCommand

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Business Rules:
    - Only fields present in the command are changed
    - A changed email must not belong to another user (EMAIL_ALREADY_EXISTS)
    - updated_at is refreshed on every successful update
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, user_id: str, command: UpdateUserCommand) -> Result[UserInfo]:
        """
        Args:
            user_id: User to update
            command: UpdateUserCommand; None fields are left unchanged

        Returns:
            Result with UserInfo, or Error(USER_NOT_FOUND | EMAIL_ALREADY_EXISTS |
            INVALID_PASSWORD)
        """
        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                if command.email is not None and command.email != user.email:
                    owner = await self.uow.users.get_by_email(command.email)
                    if owner is not None and owner.id != user.id:
                        return Return.err(
                            Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                        )
                    user.email = command.email

                if command.password is not None:
                    try:
                        user.password_hash = self.password_hasher.hash(command.password)
                    except ValueError as exc:
                        return Return.err(Error("INVALID_PASSWORD", str(exc)))

                if command.username is not None:
                    user.username = command.username
                if command.fullname is not None:
                    user.fullname = command.fullname
                if command.avatar is not None:
                    user.avatar = command.avatar

                user.updated_at = utcnow()
                user = await self.uow.users.update(user)
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        logger.info(f"Updated user {user_id}")
        return Return.ok(UserInfo.from_entity(user))
