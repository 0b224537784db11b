"""
Credential cookies.

Both cookies are HttpOnly, Secure, SameSite=None, scoped to the configured
domain and Path=/. Max-Age follows the token's remaining lifetime.
"""

from datetime import UTC, datetime, timedelta

from fastapi import Response

from auth_service.app.services.token_codec import TokenCodec
from auth_service.app.use_cases.auth import AuthResponse

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def cookie_max_age(expires_at: datetime, fallback: timedelta) -> int:
    """Seconds until expiry, or the configured TTL if that is not positive"""
    remaining = int((expires_at - datetime.now(UTC)).total_seconds())
    if remaining <= 0:
        return int(fallback.total_seconds())
    return remaining


def set_auth_cookies(
    response: Response, auth: AuthResponse, token_codec: TokenCodec, domain: str
) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        auth.access_token,
        max_age=cookie_max_age(auth.access_token_expires_at, token_codec.access_ttl),
        path="/",
        domain=domain,
        secure=True,
        httponly=True,
        samesite="none",
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        auth.refresh_token,
        max_age=cookie_max_age(auth.refresh_token_expires_at, token_codec.refresh_ttl),
        path="/",
        domain=domain,
        secure=True,
        httponly=True,
        samesite="none",
    )


def clear_auth_cookies(response: Response, domain: str) -> None:
    """Overwrite both cookies with an empty value expiring at the epoch"""
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.set_cookie(
            name,
            "",
            max_age=0,
            expires=EPOCH,
            path="/",
            domain=domain,
            secure=True,
            httponly=True,
            samesite="none",
        )
