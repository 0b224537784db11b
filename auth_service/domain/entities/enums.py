"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Global role carried in access tokens"""

    user = "user"
    admin = "admin"
