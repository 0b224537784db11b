"""
Token Codec

Issues and verifies the access/refresh JWT pair. Stateless apart from its
immutable secrets, so one instance is shared by every request.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from jose import jwk, jwt
from jose.exceptions import ExpiredSignatureError, JWKError, JWSError, JWTError
from jose.utils import base64url_decode
from pydantic import BaseModel, ConfigDict

from auth_service.domain.base import generate_uuid
from auth_service.domain.errors import (
    ConfigError,
    TokenBadSignatureError,
    TokenExpiredError,
    TokenMalformedError,
    TokenWrongAlgorithmError,
)

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

REFRESH_CLAIMS = ("sub", "exp", "iat", "nbf", "jti", "session_id")
ACCESS_CLAIMS = REFRESH_CLAIMS + ("email", "username", "roles")


class TokenPair(BaseModel):
    """Access + refresh token issued together for one session generation"""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime
    jti: str  # access token id
    session_id: str


class ClaimsPayload(BaseModel):
    """Trusted claims, produced only by a successful verification"""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str = ""
    username: str = ""
    roles: List[str] = []
    jti: str
    session_id: str
    expires_at: datetime


class TokenCodec:
    """
    HMAC signer/verifier for the two token classes.

    Business Rules:
    - Access and refresh tokens use independent, non-empty, distinct secrets
    - Only the configured HMAC algorithm is accepted at verification
    - The SID is fresh per login and reused across rotations of that session
    - Every token gets its own JTI
    - exp/nbf are checked with a small symmetric leeway
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
        leeway_seconds: int = 5,
    ):
        if not access_secret or not refresh_secret:
            raise ConfigError("access and refresh secrets must be provided")
        if access_secret == refresh_secret:
            raise ConfigError("access and refresh secrets must differ")
        if algorithm not in HMAC_ALGORITHMS:
            raise ConfigError(f"unsupported signing algorithm: {algorithm}")

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._algorithm = algorithm
        self._leeway = leeway_seconds

    @classmethod
    def from_config(cls, config) -> "TokenCodec":
        return cls(
            access_secret=config.JWT_ACCESS_SECRET,
            refresh_secret=config.JWT_REFRESH_SECRET,
            access_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
            refresh_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            algorithm=config.JWT_ALGORITHM,
            leeway_seconds=config.TOKEN_LEEWAY_SECONDS,
        )

    @property
    def access_ttl(self) -> timedelta:
        return self._access_ttl

    @property
    def refresh_ttl(self) -> timedelta:
        return self._refresh_ttl

    def issue_pair(
        self,
        user_id: str,
        email: str,
        username: str,
        roles: Iterable[str],
        session_id: Optional[str] = None,
    ) -> TokenPair:
        """
        Issue an access + refresh token for the given subject.

        Args:
            user_id: Subject id (canonical string form)
            email: Subject email, carried in the access token
            username: Subject username, carried in the access token
            roles: Role names, carried in the access token
            session_id: Existing SID when rotating; a new one is minted if None

        Returns:
            TokenPair sharing one SID, with independent JTIs
        """
        now = datetime.now(UTC).replace(microsecond=0)
        access_exp = now + self._access_ttl
        refresh_exp = now + self._refresh_ttl

        jti = generate_uuid()
        sid = session_id or generate_uuid()

        access_claims = {
            "sub": user_id,
            "email": email,
            "username": username,
            "roles": list(roles),
            "jti": jti,
            "session_id": sid,
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int(access_exp.timestamp()),
        }
        # Refresh token stays minimal; the SID ties it to the session row
        refresh_claims = {
            "sub": user_id,
            "jti": generate_uuid(),
            "session_id": sid,
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int(refresh_exp.timestamp()),
        }

        try:
            access_token = jwt.encode(
                access_claims, self._access_secret, algorithm=self._algorithm
            )
            refresh_token = jwt.encode(
                refresh_claims, self._refresh_secret, algorithm=self._algorithm
            )
        except JWSError:
            logger.exception("Failed to sign token pair")
            raise

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_at=access_exp,
            refresh_expires_at=refresh_exp,
            jti=jti,
            session_id=sid,
        )

    def verify_access(self, token: str) -> ClaimsPayload:
        """
        Verify an access token.

        Raises:
            TokenVerifyError subclass (expired, malformed, bad signature,
            wrong algorithm)
        """
        claims = self._decode(token, self._access_secret, ACCESS_CLAIMS)

        roles = claims["roles"]
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise TokenMalformedError("roles claim must be a list of strings")
        if not isinstance(claims["email"], str) or not isinstance(claims["username"], str):
            raise TokenMalformedError("identity claims must be strings")

        return ClaimsPayload(
            user_id=claims["sub"],
            email=claims["email"],
            username=claims["username"],
            roles=roles,
            jti=claims["jti"],
            session_id=claims["session_id"],
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )

    def verify_refresh(self, token: str) -> ClaimsPayload:
        """
        Verify a refresh token.

        Raises:
            TokenVerifyError subclass (expired, malformed, bad signature,
            wrong algorithm)
        """
        claims = self._decode(token, self._refresh_secret, REFRESH_CLAIMS)
        return ClaimsPayload(
            user_id=claims["sub"],
            jti=claims["jti"],
            session_id=claims["session_id"],
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )

    def _decode(self, token: str, secret: str, required: Iterable[str]) -> Dict[str, Any]:
        if not token:
            raise TokenMalformedError("token empty")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise TokenMalformedError("token header is not decodable") from exc

        # Reject anything but the configured HMAC before touching the key
        if header.get("alg") != self._algorithm:
            raise TokenWrongAlgorithmError("unexpected signing method")

        signing_input, _, crypto_segment = token.rpartition(".")
        try:
            signature = base64url_decode(crypto_segment.encode("ascii"))
            key = jwk.construct(secret, self._algorithm)
        except (ValueError, JWKError) as exc:
            raise TokenMalformedError("token is not a valid JWS") from exc
        if not key.verify(signing_input.encode("utf-8"), signature):
            raise TokenBadSignatureError("signature verification failed")

        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={
                    "leeway": self._leeway,
                    "require_exp": True,
                    "require_iat": True,
                    "require_nbf": True,
                    "require_sub": True,
                    "require_jti": True,
                },
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("token has expired") from exc
        except JWTError as exc:
            raise TokenMalformedError(str(exc)) from exc

        missing = [name for name in required if name not in claims]
        if missing:
            raise TokenMalformedError(f"missing claims: {', '.join(missing)}")

        sid = claims["session_id"]
        if not isinstance(sid, str) or not sid:
            raise TokenMalformedError("session_id claim must be a non-empty string")

        return claims
