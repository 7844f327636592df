"""Authentication configuration.

Declares the single OAuth provider (Google), the MongoDB session adapter,
the page routes used by the frontend and the session/redirect callbacks.
The OAuth protocol itself is handled by Authlib.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from authlib.integrations.starlette_client import OAuth
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.auth.adapter import MongoDBAdapter
from app.config import Settings
from app.models.auth import Session, User

logger = logging.getLogger(__name__)

GOOGLE_DISCOVERY_URL = "https://accounts.google.com/.well-known/openid-configuration"


@dataclass
class GoogleProvider:
    """Google OpenID Connect provider."""

    client_id: str = ""
    client_secret: str = ""
    id: str = "google"
    name: str = "Google"
    type: str = "oauth"
    server_metadata_url: str = GOOGLE_DISCOVERY_URL
    scope: str = "openid email profile"

    def register(self, oauth: OAuth) -> None:
        oauth.register(
            name=self.id,
            client_id=self.client_id,
            client_secret=self.client_secret,
            server_metadata_url=self.server_metadata_url,
            client_kwargs={"scope": self.scope},
        )


@dataclass
class AuthPages:
    """Frontend routes the auth flow sends users to."""

    sign_in: str = "/auth/signin"
    sign_out: str = "/auth/signout"
    error: str = "/auth/error"  # Error code passed in query string as ?error=
    verify_request: str = "/auth/verify-request"
    new_user: Optional[str] = None


class AuthCallbacks:
    """Hooks invoked while building sessions and redirects."""

    async def session(self, session: Session, user: User) -> Session:
        """Expose the database user id on the client session."""
        session.user.id = user.id
        return session

    async def redirect(self, url: str, base_url: str) -> str:
        """Always land on the site root after sign in or sign out."""
        return base_url


@dataclass
class AuthOptions:
    """Complete authentication setup used by the auth routes."""

    providers: List[GoogleProvider]
    adapter: MongoDBAdapter
    base_url: str
    pages: AuthPages = field(default_factory=AuthPages)
    callbacks: AuthCallbacks = field(default_factory=AuthCallbacks)
    session_max_age: int = 30 * 24 * 60 * 60
    session_cookie_name: str = "session-token"
    oauth: OAuth = field(default_factory=OAuth)

    def __post_init__(self) -> None:
        for provider in self.providers:
            provider.register(self.oauth)

    def get_provider(self, provider_id: str) -> Optional[GoogleProvider]:
        return next((p for p in self.providers if p.id == provider_id), None)

    @property
    def secure_cookies(self) -> bool:
        return self.base_url.startswith("https://")


def build_auth_options(settings: Settings, db: AsyncIOMotorDatabase) -> AuthOptions:
    """Build the auth configuration from settings and the shared database."""
    if not settings.google_client_id or not settings.google_client_secret:
        logger.warning("Google OAuth client id/secret not configured; sign in will fail")

    return AuthOptions(
        providers=[
            GoogleProvider(
                client_id=settings.google_client_id,
                client_secret=settings.google_client_secret,
            )
        ],
        adapter=MongoDBAdapter(db),
        base_url=settings.base_url.rstrip("/"),
        session_max_age=settings.session_max_age,
    )
