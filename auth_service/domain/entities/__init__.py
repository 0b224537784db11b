"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserRole

# Export all entities
from .user import User, UserFilter
from .session import Session, SessionFilter, SessionPatch

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "UserFilter",
    "Session",
    "SessionFilter",
    "SessionPatch",
]
