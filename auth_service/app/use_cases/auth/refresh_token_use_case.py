"""
Refresh Token Use Case

Exchanges a refresh token for a new pair, rotating the session's refresh
digest and detecting replay of superseded tokens.
"""

import logging

from libs.result import Error, Result, Return
from auth_service.app.services.token_codec import TokenCodec
from auth_service.app.services.token_hash import compare_token_hash, hash_token
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import SessionPatch, UserRole
from auth_service.domain.errors import StoreError, TokenVerifyError
from .dtos import AuthResponse, RefreshCommand, UserInfo

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Signature/expiry are verified before any session lookup
    - Session must exist, be valid and not be expired
    - The presented token must match the stored digest (constant-time);
      a verified token that does not match is a replay: the session is
      deleted and the caller must log in again
    - The new pair keeps the SID; JTIs and expiries are fresh
    - The digest swap is conditional on the digest read above, so two
      concurrent refreshes cannot both rotate
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, command: RefreshCommand) -> Result[AuthResponse]:
        """
        Execute refresh token use case.

        Args:
            command: RefreshCommand with the presented refresh token and provenance

        Returns:
            Result with AuthResponse containing the rotated pair, or Error
        """
        try:
            claims = self.token_codec.verify_refresh(command.refresh_token)
        except TokenVerifyError as exc:
            logger.info(f"Refresh token rejected: {exc.reason.value}")
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_id(claims.session_id)

                if (
                    session is None
                    or not session.is_active(utcnow())
                    or session.user_id != claims.user_id
                ):
                    return Return.err(
                        Error("INVALID_SESSION", "Session expired or revoked")
                    )

                expected_hash = session.refresh_token_hash
                if not compare_token_hash(expected_hash, command.refresh_token):
                    await self.uow.sessions.delete(session.id)
                    await self.uow.commit()
                    logger.warning(
                        f"Refresh token reuse detected, session {session.id} deleted"
                    )
                    return Return.err(
                        Error("REFRESH_TOKEN_REUSED", "Refresh token reuse detected")
                    )

                user = await self.uow.users.get_by_id(session.user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "Linked user not found"))

                pair = self.token_codec.issue_pair(
                    user.id,
                    user.email,
                    user.username,
                    [UserRole(user.role).value],
                    session_id=session.id,
                )

                rotated = await self.uow.sessions.rotate(
                    session.id,
                    expected_hash,
                    SessionPatch(
                        refresh_token_hash=hash_token(pair.refresh_token),
                        expires_at=pair.refresh_expires_at.replace(tzinfo=None),
                        ip_address=command.ip_address,
                        user_agent=command.user_agent,
                        updated_at=utcnow(),
                    ),
                )
                if rotated is None:
                    logger.warning(f"Concurrent rotation lost on session {session.id}")
                    return Return.err(
                        Error("ROTATION_CONFLICT", "Session was refreshed concurrently")
                    )

                await self.uow.commit()
        except StoreError as exc:
            return Return.err(Error("STORE_FAILURE", str(exc)))

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
