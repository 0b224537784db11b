"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from auth_service.domain.entities import Session, User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    username: str
    fullname: str
    email: str
    password: str


class LoginCommand(BaseModel):
    """Validated login intent, with provenance captured by the API layer"""

    email: str
    password: str
    ip_address: str = ""
    user_agent: str = ""


class RefreshCommand(BaseModel):
    """Refresh token exchange request"""

    refresh_token: str
    ip_address: str = ""
    user_agent: str = ""


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user representation (never carries the password hash)"""

    id: str
    username: str
    fullname: str
    email: str
    avatar: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            username=user.username,
            fullname=user.fullname,
            email=user.email,
            avatar=user.avatar,
            role=UserRole(user.role).value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class SessionInfo(BaseModel):
    """Public session representation (never carries the refresh hash)"""

    id: str
    user_id: str
    ip_address: str
    user_agent: str
    valid: bool
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, session: Session) -> "SessionInfo":
        return cls(
            id=session.id,
            user_id=session.user_id,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            valid=session.valid,
            expires_at=session.expires_at,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class AuthResponse(BaseModel):
    """Response for login and refresh use cases"""

    user: UserInfo
    session_id: str
    access_token: str
    refresh_token: str
    access_token_expires_at: datetime
    refresh_token_expires_at: datetime


class SessionActionResponse(BaseModel):
    """Response for logout and session invalidation"""

    session_id: str
    changed: bool
