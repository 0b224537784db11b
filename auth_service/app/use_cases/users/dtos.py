"""
User Management DTOs
"""

from typing import Optional

from pydantic import BaseModel

from auth_service.domain.entities import UserRole


class CreateUserCommand(BaseModel):
    """Admin-side account creation; unlike registration the role is chosen"""

    username: str
    fullname: str = ""
    email: str
    password: str
    role: UserRole = UserRole.user


class UpdateUserCommand(BaseModel):
    """Sparse profile update; None leaves the field unchanged"""

    username: Optional[str] = None
    fullname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    avatar: Optional[str] = None
