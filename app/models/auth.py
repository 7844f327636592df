"""Authentication Pydantic models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """User document as stored by the session adapter."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    emailVerified: Optional[datetime] = None


class Account(BaseModel):
    """Provider account linked to a user."""

    userId: str
    type: str = "oauth"
    provider: str
    providerAccountId: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    id_token: Optional[str] = None


class DatabaseSession(BaseModel):
    """Session row persisted by the adapter."""

    sessionToken: str
    userId: str
    expires: datetime


class SessionUser(BaseModel):
    """User fields exposed to the client."""

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None


class Session(BaseModel):
    """Session payload returned by ``/api/auth/session``."""

    user: SessionUser = Field(default_factory=SessionUser)
    expires: datetime
