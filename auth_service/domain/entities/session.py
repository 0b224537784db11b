"""
Session Entity

One row per login. The row id is the session id (SID) embedded in every
access/refresh token generation issued for that login.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - binds the current refresh token to a login.

    Business Rules:
    - Only the SHA-256 digest of the current refresh token is stored
    - Tokens rotate on each refresh; the SID never changes
    - valid=False blocks refresh even before expires_at
    - A refresh token that verifies but does not match the digest deletes the row
    """

    __tablename__ = "sessions"

    id: str = Field(primary_key=True, max_length=36)

    user_id: str = Field(foreign_key="users.id", nullable=False, index=True)

    ip_address: str = Field(default="", max_length=64)
    user_agent: str = Field(default="", max_length=512)

    valid: bool = Field(default=True)
    refresh_token_hash: str = Field(max_length=64)  # SHA-256 hex digest

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_valid", "user_id", "valid"),
    )

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """True while the session is valid and not past its expiry"""
        now = now or utcnow()
        return self.valid and now < self.expires_at


class SessionPatch(SQLModel):
    """
    Sparse update for a session.

    Absent (None or empty) fields mean "leave unchanged"; they are never
    written as nulls.
    """

    refresh_token_hash: Optional[str] = None
    expires_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    valid: Optional[bool] = None
    updated_at: Optional[datetime] = None

    def changes(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in self.model_dump().items()
            if value is not None and value != ""
        }


class SessionFilter(SQLModel):
    """Optional filters for listing sessions; unset fields do not constrain"""

    user_id: Optional[str] = None
    valid: Optional[bool] = None
