from abc import ABC, abstractmethod
from typing import Optional

# bcrypt reads at most this many bytes of input
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    """True if the UTF-8 encoding is within the hashable length"""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


class IPasswordHasher(ABC):
    """Password hashing capability - application layer"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """
        Return a storable digest of the password.

        Raises:
            ValueError: empty password, or longer than MAX_PASSWORD_BYTES
        """
        pass

    @abstractmethod
    def verify(self, digest: Optional[str], password: str) -> bool:
        """
        Check a password against a digest.

        A missing digest still costs one full hash comparison and returns
        False, so unknown accounts take as long as wrong passwords. Input
        length is treated identically on both paths.
        """
        pass
