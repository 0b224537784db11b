"""
Create User Use Case

Admin creation of an account with an explicit role.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import UserInfo
from auth_service.domain.entities import User
from auth_service.domain.errors import StoreError
from .dtos import CreateUserCommand

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Business Rules:
    - Email must be unused (EMAIL_ALREADY_EXISTS)
    - Role defaults to user when not given
    - Password is hashed by the injected hasher (INVALID_PASSWORD if refused)
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, command: CreateUserCommand) -> Result[UserInfo]:
        try:
            async with self.uow:
                if await self.uow.users.get_by_email(command.email):
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                    )

                try:
                    password_hash = self.password_hasher.hash(command.password)
                except ValueError as exc:
                    return Return.err(Error("INVALID_PASSWORD", str(exc)))

                user = await self.uow.users.create(
                    User(
                        username=command.username,
                        fullname=command.fullname,
                        email=command.email,
                        password_hash=password_hash,
                        role=command.role,
                    )
                )
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        logger.info(f"Admin created user {user.id} with role {command.role.value}")
        return Return.ok(UserInfo.from_entity(user))
