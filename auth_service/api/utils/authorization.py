"""
Authorization Gate

Per-request FastAPI dependency that extracts the access token, verifies it
and enforces a role policy. No state is kept between requests.
"""

import logging
from typing import Iterable, Optional

from fastapi import Request, status
from libs.result import Error

from auth_service.api.error import ClientError
from auth_service.api.utils.cookies import ACCESS_TOKEN_COOKIE
from auth_service.app.services.token_codec import ClaimsPayload, TokenCodec
from auth_service.domain.errors import TokenVerifyError

logger = logging.getLogger(__name__)

QUERY_TOKEN_PARAM = "token"


def extract_bearer_token(header: Optional[str]) -> str:
    """Token from an ``Authorization: Bearer <token>`` header, else empty"""
    if not header:
        return ""
    scheme, _, credentials = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return credentials.strip()


def extract_token(request: Request, allow_query: bool = False) -> str:
    """
    First match wins: bearer header, access-token cookie, then the ``token``
    query parameter when explicitly enabled.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token:
        return token
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    if allow_query:
        return request.query_params.get(QUERY_TOKEN_PARAM, "")
    return ""


def has_role_intersection(user_roles: Iterable[str], required: Iterable[str]) -> bool:
    """Case-insensitive: any one required role suffices"""
    owned = {role.lower() for role in user_roles}
    return any(role.lower() in owned for role in required)


def claims_from_request(request: Request) -> Optional[ClaimsPayload]:
    """Claims attached by AuthorizationGate, or None for anonymous requests"""
    return getattr(request.state, "claims", None)


class AuthorizationGate:
    """
    Dependency enforcing an access policy.

    Usage:
        Depends(AuthorizationGate())                       # any valid token
        Depends(AuthorizationGate(roles=["admin"]))        # role required
        Depends(AuthorizationGate(allow_anonymous=True))   # token optional

    Anonymous-allowed policies degrade to unauthenticated on a missing or
    invalid token instead of failing. On success the verified claims are
    stored on ``request.state.claims`` and returned.
    """

    def __init__(
        self, roles: Optional[Iterable[str]] = None, allow_anonymous: bool = False
    ):
        self.roles = list(roles or [])
        self.allow_anonymous = allow_anonymous

    async def __call__(self, request: Request) -> Optional[ClaimsPayload]:
        token_codec: TokenCodec = request.app.state.token_codec
        allow_query = bool(request.app.state.config.ALLOW_QUERY_TOKEN)

        token = extract_token(request, allow_query=allow_query)
        if not token:
            if self.allow_anonymous:
                return None
            raise ClientError(
                Error("UNAUTHORIZED", "Missing access token"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        try:
            claims = token_codec.verify_access(token)
        except TokenVerifyError as exc:
            logger.info(f"Access token rejected: {exc.reason.value}")
            if self.allow_anonymous:
                return None
            raise ClientError(
                Error("UNAUTHORIZED", "Invalid or expired token"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        if self.roles and not has_role_intersection(claims.roles, self.roles):
            raise ClientError(
                Error("FORBIDDEN", "Insufficient permissions"),
                status_code=status.HTTP_403_FORBIDDEN,
            )

        request.state.claims = claims
        return claims
