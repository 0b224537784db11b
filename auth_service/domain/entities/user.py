"""
User Entity

Represents a principal that can open sessions.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import generate_uuid, utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - the owner of sessions.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash, never returned by the API
    - Role is embedded in access tokens as a single-element role list
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)
    username: str = Field(index=True, max_length=100)
    fullname: str = Field(default="", max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    avatar: Optional[str] = Field(default=None, max_length=512)

    role: UserRole = Field(default=UserRole.user)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class UserFilter(SQLModel):
    """Optional filters for listing users; unset fields do not constrain"""

    email: Optional[str] = None
    role: Optional[UserRole] = None
    search: Optional[str] = None
