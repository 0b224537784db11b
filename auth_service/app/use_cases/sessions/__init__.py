"""
Session Management Use Cases
"""

from .invalidate_session_use_case import InvalidateSessionUseCase
from .list_sessions_use_case import ListSessionsUseCase

__all__ = [
    "InvalidateSessionUseCase",
    "ListSessionsUseCase",
]
