"""
Register Use Case

Creates a user account. Does not open a session.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.entities import User, UserRole
from auth_service.domain.errors import StoreError
from .dtos import RegisterCommand, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject an email that is already registered (EMAIL_ALREADY_EXISTS)
    2. Hash the password through the injected hasher (INVALID_PASSWORD if
       the hasher refuses it)
    3. Create the user with role=user
    4. Commit and return the public user view
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, command: RegisterCommand) -> Result[UserInfo]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated username, fullname, email, password

        Returns:
            Result[UserInfo], or Error(EMAIL_ALREADY_EXISTS | INVALID_PASSWORD)
        """
        try:
            async with self.uow:
                existing_user = await self.uow.users.get_by_email(command.email)
                if existing_user:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                    )

                try:
                    password_hash = self.password_hasher.hash(command.password)
                except ValueError as exc:
                    return Return.err(Error("INVALID_PASSWORD", str(exc)))

                user = User(
                    username=command.username,
                    fullname=command.fullname,
                    email=command.email,
                    password_hash=password_hash,
                    role=UserRole.user,
                )
                user = await self.uow.users.create(user)
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        logger.info(f"Registered user {user.id}")
        return Return.ok(UserInfo.from_entity(user))
