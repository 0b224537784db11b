"""
Bcrypt Password Hasher

CredentialVerifier backed by bcrypt.
"""

from typing import Optional

import bcrypt

from auth_service.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    IPasswordHasher,
)


class BcryptPasswordHasher(IPasswordHasher):
    """
    bcrypt implementation of IPasswordHasher.

    A dummy digest with the same cost is prepared up front so that checks
    against unknown accounts run a real bcrypt comparison.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("password cannot be empty")
        candidate = password.encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(candidate, bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, digest: Optional[str], password: str) -> bool:
        # Same prefix on both branches so over-long input costs the same
        candidate = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        if not digest:
            bcrypt.checkpw(candidate, self._dummy_hash)
            return False
        try:
            return bcrypt.checkpw(candidate, digest.encode("utf-8"))
        except ValueError:
            # Malformed stored digest
            return False
