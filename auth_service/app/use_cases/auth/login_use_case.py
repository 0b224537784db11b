"""
Login Use Case

Authenticates a user, opens a session and issues the first token pair.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.token_codec import TokenCodec
from auth_service.app.services.token_hash import hash_token
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import Session, UserRole
from auth_service.domain.errors import StoreError
from .dtos import AuthResponse, LoginCommand, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password produce the same error, and both run
      one bcrypt comparison (no account enumeration by message or timing)
    - A new SID is minted per login; the session row id is that SID
    - Only the digest of the refresh token is persisted
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        token_codec: TokenCodec,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_codec = token_codec

    async def execute(self, command: LoginCommand) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with credentials and request provenance

        Returns:
            Result with AuthResponse containing the token pair and user, or Error
        """
        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(command.email)

                password_valid = self.password_hasher.verify(
                    user.password_hash if user else None, command.password
                )
                if user is None or not password_valid:
                    return Return.err(INVALID_CREDENTIALS)

                pair = self.token_codec.issue_pair(
                    user.id,
                    user.email,
                    user.username,
                    [UserRole(user.role).value],
                )

                now = utcnow()
                session = Session(
                    id=pair.session_id,
                    user_id=user.id,
                    ip_address=command.ip_address,
                    user_agent=command.user_agent,
                    valid=True,
                    refresh_token_hash=hash_token(pair.refresh_token),
                    expires_at=pair.refresh_expires_at.replace(tzinfo=None),
                    created_at=now,
                    updated_at=now,
                )
                await self.uow.sessions.create(session)
                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

        logger.info(f"User {user.id} logged in with session {pair.session_id}")

        return Return.ok(
            AuthResponse(
                user=UserInfo.from_entity(user),
                session_id=pair.session_id,
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
                access_token_expires_at=pair.access_expires_at,
                refresh_token_expires_at=pair.refresh_expires_at,
            )
        )
