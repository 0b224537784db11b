"""
Domain-level exceptions.

Framework-agnostic: raised by token, store and configuration code and
translated to ``libs.result.Error`` values by the use cases.
"""

from enum import Enum


class ConfigError(Exception):
    """Fatal misconfiguration detected at startup (e.g. missing secrets)"""


class StoreErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"


class StoreError(Exception):
    """Session/user store failure"""

    def __init__(self, kind: StoreErrorKind, message: str):
        self.kind = kind
        super().__init__(message)


class VerifyErrorReason(str, Enum):
    EXPIRED = "expired"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    WRONG_ALGORITHM = "wrong_algorithm"


class TokenVerifyError(Exception):
    """Token failed verification; no claims are exposed"""

    reason: VerifyErrorReason = VerifyErrorReason.MALFORMED

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class TokenExpiredError(TokenVerifyError):
    reason = VerifyErrorReason.EXPIRED


class TokenMalformedError(TokenVerifyError):
    reason = VerifyErrorReason.MALFORMED


class TokenBadSignatureError(TokenVerifyError):
    reason = VerifyErrorReason.BAD_SIGNATURE


class TokenWrongAlgorithmError(TokenVerifyError):
    reason = VerifyErrorReason.WRONG_ALGORITHM
