"""
User Management Use Cases

Admin-facing user record operations.
"""

from .create_user_use_case import CreateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import CreateUserCommand, UpdateUserCommand
from .get_user_use_case import GetUserUseCase
from .list_users_use_case import ListUsersUseCase
from .update_user_use_case import UpdateUserUseCase

__all__ = [
    "CreateUserCommand",
    "UpdateUserCommand",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "DeleteUserUseCase",
]
