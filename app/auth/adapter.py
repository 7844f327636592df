"""MongoDB-backed persistence for users, provider accounts and sessions."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.auth import Account, DatabaseSession, User

logger = logging.getLogger(__name__)


def _to_user(doc: Dict[str, Any]) -> User:
    data = {k: v for k, v in doc.items() if k != "_id"}
    return User(id=str(doc["_id"]), **data)


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive datetimes unless the client is tz_aware.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class MongoDBAdapter:
    """Session adapter storing auth state in the application database."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.users = db["users"]
        self.accounts = db["accounts"]
        self.sessions = db["sessions"]

    # Users

    async def create_user(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        image: Optional[str] = None,
        email_verified: Optional[datetime] = None,
    ) -> User:
        doc = {"name": name, "email": email, "image": image, "emailVerified": email_verified}
        result = await self.users.insert_one(doc)
        logger.info("Created user", extra={"user_id": str(result.inserted_id)})
        return User(id=str(result.inserted_id), name=name, email=email, image=image, emailVerified=email_verified)

    async def get_user(self, user_id: str) -> Optional[User]:
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        doc = await self.users.find_one({"_id": oid})
        return _to_user(doc) if doc else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        doc = await self.users.find_one({"email": email})
        return _to_user(doc) if doc else None

    async def get_user_by_account(self, provider: str, provider_account_id: str) -> Optional[User]:
        account = await self.accounts.find_one(
            {"provider": provider, "providerAccountId": provider_account_id}
        )
        if not account:
            return None
        return await self.get_user(account["userId"])

    # Accounts

    async def link_account(self, account: Account) -> Account:
        await self.accounts.insert_one(account.model_dump())
        logger.info(
            "Linked account",
            extra={"user_id": account.userId, "provider": account.provider},
        )
        return account

    # Sessions

    async def create_session(self, user_id: str, max_age: int) -> DatabaseSession:
        session = DatabaseSession(
            sessionToken=secrets.token_urlsafe(32),
            userId=user_id,
            expires=datetime.now(timezone.utc) + timedelta(seconds=max_age),
        )
        await self.sessions.insert_one(session.model_dump())
        return session

    async def get_session_and_user(self, session_token: str) -> Optional[Tuple[DatabaseSession, User]]:
        """Resolve a session token; expired sessions are removed and ignored."""
        doc = await self.sessions.find_one({"sessionToken": session_token})
        if not doc:
            return None

        session = DatabaseSession(
            sessionToken=doc["sessionToken"],
            userId=doc["userId"],
            expires=_as_utc(doc["expires"]),
        )
        if session.expires <= datetime.now(timezone.utc):
            await self.delete_session(session_token)
            return None

        user = await self.get_user(session.userId)
        if user is None:
            return None
        return session, user

    async def delete_session(self, session_token: str) -> None:
        await self.sessions.delete_one({"sessionToken": session_token})
