"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows and session resolution
- sessions/: Session management
- users/: User management
"""

from .auth import (
    GetMeUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterUseCase,
    ValidateSessionUseCase,
)
from .sessions import (
    InvalidateSessionUseCase,
    ListSessionsUseCase,
)
from .users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetMeUseCase",
    "ValidateSessionUseCase",
    # Sessions
    "InvalidateSessionUseCase",
    "ListSessionsUseCase",
    # Users
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
]
