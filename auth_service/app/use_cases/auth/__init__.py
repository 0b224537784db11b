"""
Authentication Use Cases

Registration, login, refresh rotation, logout and session resolution.
"""

from .dtos import (
    AuthResponse,
    LoginCommand,
    RefreshCommand,
    RegisterCommand,
    SessionActionResponse,
    SessionInfo,
    UserInfo,
)
from .get_me_use_case import GetMeUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .register_use_case import RegisterUseCase
from .validate_session_use_case import ValidateSessionUseCase

__all__ = [
    # Commands
    "RegisterCommand",
    "LoginCommand",
    "RefreshCommand",
    # Responses
    "AuthResponse",
    "SessionActionResponse",
    "SessionInfo",
    "UserInfo",
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetMeUseCase",
    "ValidateSessionUseCase",
]
