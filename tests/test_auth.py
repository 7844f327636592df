"""Tests for the auth configuration, session adapter and auth routes."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from authlib.integrations.starlette_client import OAuthError
from bson import ObjectId
from fastapi.testclient import TestClient

from app.auth.adapter import MongoDBAdapter
from app.auth.config import AuthCallbacks, AuthPages, build_auth_options
from app.config import Settings
from app.models.auth import Account, Session, SessionUser, User


class TestAuthConfiguration:
    """Declarative auth options."""

    def test_pages(self):
        pages = AuthPages()
        assert pages.sign_in == "/auth/signin"
        assert pages.sign_out == "/auth/signout"
        assert pages.error == "/auth/error"
        assert pages.verify_request == "/auth/verify-request"
        assert pages.new_user is None

    def test_build_from_settings(self, mock_db):
        settings = Settings(
            google_client_id="cid",
            google_client_secret="secret",
            base_url="https://recipes.example.com/",
        )
        options = build_auth_options(settings, mock_db)

        assert [p.id for p in options.providers] == ["google"]
        assert options.providers[0].client_id == "cid"
        assert options.base_url == "https://recipes.example.com"
        assert options.secure_cookies is True
        assert options.oauth.create_client("google") is not None
        assert isinstance(options.adapter, MongoDBAdapter)

    def test_missing_credentials_default_to_empty(self, mock_db):
        options = build_auth_options(Settings(google_client_id="", google_client_secret=""), mock_db)
        assert options.providers[0].client_id == ""
        assert options.providers[0].client_secret == ""

    @pytest.mark.asyncio
    async def test_session_callback_copies_user_id(self):
        session = Session(user=SessionUser(name="Ada"), expires=datetime.now(timezone.utc))
        user = User(id="abc123", name="Ada")

        result = await AuthCallbacks().session(session, user)

        assert result.user.id == "abc123"
        assert result.user.name == "Ada"

    @pytest.mark.parametrize(
        "url",
        ["http://testserver/recipes", "https://evil.example.com", "/auth/signin?callbackUrl=/x"],
    )
    @pytest.mark.asyncio
    async def test_redirect_callback_always_returns_base_url(self, url):
        assert await AuthCallbacks().redirect(url, "http://testserver") == "http://testserver"


class TestMongoDBAdapter:
    """Session adapter persistence."""

    @pytest.mark.asyncio
    async def test_create_session_stores_token(self, mock_db):
        adapter = MongoDBAdapter(mock_db)

        session = await adapter.create_session("user-1", max_age=60)

        stored = mock_db["sessions"].insert_one.await_args.args[0]
        assert stored["sessionToken"] == session.sessionToken
        assert stored["userId"] == "user-1"
        assert session.expires > datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_get_session_and_user(self, mock_db):
        user_oid = ObjectId()
        mock_db["sessions"].find_one.return_value = {
            "sessionToken": "tok",
            "userId": str(user_oid),
            "expires": (datetime.now(timezone.utc) + timedelta(days=1)).replace(tzinfo=None),
        }
        mock_db["users"].find_one.return_value = {"_id": user_oid, "name": "Ada", "email": "ada@example.com"}

        session, user = await MongoDBAdapter(mock_db).get_session_and_user("tok")

        assert session.userId == str(user_oid)
        assert user.id == str(user_oid)
        assert user.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_expired_session_is_deleted(self, mock_db):
        mock_db["sessions"].find_one.return_value = {
            "sessionToken": "tok",
            "userId": str(ObjectId()),
            "expires": datetime.now(timezone.utc) - timedelta(seconds=1),
        }

        assert await MongoDBAdapter(mock_db).get_session_and_user("tok") is None
        mock_db["sessions"].delete_one.assert_awaited_once_with({"sessionToken": "tok"})

    @pytest.mark.asyncio
    async def test_unknown_session(self, mock_db):
        assert await MongoDBAdapter(mock_db).get_session_and_user("missing") is None

    @pytest.mark.asyncio
    async def test_get_user_with_malformed_id(self, mock_db):
        assert await MongoDBAdapter(mock_db).get_user("not-an-object-id") is None
        mock_db["users"].find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_user_by_account(self, mock_db):
        user_oid = ObjectId()
        mock_db["accounts"].find_one.return_value = {
            "provider": "google",
            "providerAccountId": "g-1",
            "userId": str(user_oid),
        }
        mock_db["users"].find_one.return_value = {"_id": user_oid, "name": "Ada"}

        user = await MongoDBAdapter(mock_db).get_user_by_account("google", "g-1")

        assert user.id == str(user_oid)
        mock_db["accounts"].find_one.assert_awaited_once_with(
            {"provider": "google", "providerAccountId": "g-1"}
        )

    @pytest.mark.asyncio
    async def test_create_user_and_link_account(self, mock_db):
        user_oid = ObjectId()
        mock_db["users"].insert_one.return_value = MagicMock(inserted_id=user_oid)
        adapter = MongoDBAdapter(mock_db)

        user = await adapter.create_user(name="Ada", email="ada@example.com")
        await adapter.link_account(Account(userId=user.id, provider="google", providerAccountId="g-1"))

        assert user.id == str(user_oid)
        linked = mock_db["accounts"].insert_one.await_args.args[0]
        assert linked["userId"] == str(user_oid)
        assert linked["provider"] == "google"


class TestAuthRoutes:
    """Auth HTTP endpoints."""

    def test_providers(self, client: TestClient):
        response = client.get("/api/auth/providers")
        assert response.status_code == 200
        assert response.json()["google"]["callbackUrl"] == "/api/auth/callback/google"

    def test_session_when_signed_out(self, client: TestClient):
        response = client.get("/api/auth/session")
        assert response.status_code == 200
        assert response.json() == {}

    def test_session_includes_user_id(self, client: TestClient, auth_options):
        user = User(id="abc123", name="Ada", email="ada@example.com")
        session = MagicMock(expires=datetime(2030, 1, 1, tzinfo=timezone.utc))
        auth_options.adapter.get_session_and_user = AsyncMock(return_value=(session, user))
        client.cookies.set(auth_options.session_cookie_name, "tok")

        response = client.get("/api/auth/session")

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == "abc123"
        assert data["user"]["email"] == "ada@example.com"

    def test_sign_out_deletes_session_and_redirects_home(self, client: TestClient, auth_options):
        auth_options.adapter.delete_session = AsyncMock()
        client.cookies.set(auth_options.session_cookie_name, "tok")

        response = client.post("/api/auth/signout", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "http://testserver"
        auth_options.adapter.delete_session.assert_awaited_once_with("tok")

    def test_sign_in_unknown_provider(self, client: TestClient):
        response = client.get("/api/auth/signin/github", follow_redirects=False)
        assert response.status_code == 404


class TestOAuthCallback:
    """Provider callback: account linking, session cookie and error redirects."""

    @pytest.fixture
    def authorize(self, auth_options, monkeypatch):
        google = auth_options.oauth.create_client("google")
        mock = AsyncMock()
        monkeypatch.setattr(google, "authorize_access_token", mock)
        return mock

    @staticmethod
    def _token(**userinfo):
        return {
            "access_token": "at",
            "token_type": "Bearer",
            "expires_at": 1700000000,
            "id_token": "idt",
            "userinfo": {"sub": "g-1", "email": "ada@example.com", "name": "Ada", **userinfo},
        }

    def test_new_user_is_created_and_linked(self, client: TestClient, auth_options, mock_db, authorize):
        user_oid = ObjectId()
        mock_db["users"].insert_one.return_value = MagicMock(inserted_id=user_oid)
        authorize.return_value = self._token(picture="https://img/ada")

        response = client.get("/api/auth/callback/google?code=c&state=s", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "http://testserver"
        created = mock_db["users"].insert_one.await_args.args[0]
        assert created["email"] == "ada@example.com"
        assert created["image"] == "https://img/ada"
        linked = mock_db["accounts"].insert_one.await_args.args[0]
        assert linked["userId"] == str(user_oid)
        assert linked["providerAccountId"] == "g-1"
        assert linked["access_token"] == "at"
        stored = mock_db["sessions"].insert_one.await_args.args[0]
        assert stored["userId"] == str(user_oid)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{auth_options.session_cookie_name}={stored['sessionToken']}")
        assert "HttpOnly" in cookie
        assert f"Max-Age={auth_options.session_max_age}" in cookie

    def test_existing_account_signs_in(self, client: TestClient, mock_db, authorize):
        user_oid = ObjectId()
        mock_db["accounts"].find_one.return_value = {
            "provider": "google",
            "providerAccountId": "g-1",
            "userId": str(user_oid),
        }
        mock_db["users"].find_one.return_value = {"_id": user_oid, "name": "Ada"}
        authorize.return_value = self._token()

        response = client.get("/api/auth/callback/google", follow_redirects=False)

        assert response.headers["location"] == "http://testserver"
        mock_db["users"].insert_one.assert_not_awaited()
        mock_db["accounts"].insert_one.assert_not_awaited()
        assert mock_db["sessions"].insert_one.await_args.args[0]["userId"] == str(user_oid)

    def test_email_owned_by_another_account(self, client: TestClient, mock_db, authorize):
        mock_db["users"].find_one.return_value = {"_id": ObjectId(), "email": "ada@example.com"}
        authorize.return_value = self._token()

        response = client.get("/api/auth/callback/google", follow_redirects=False)

        assert response.headers["location"] == "http://testserver/auth/error?error=OAuthAccountNotLinked"
        mock_db["users"].insert_one.assert_not_awaited()
        mock_db["sessions"].insert_one.assert_not_awaited()
        assert "set-cookie" not in response.headers

    def test_profile_without_subject(self, client: TestClient, mock_db, authorize):
        authorize.return_value = {"access_token": "at", "userinfo": {"email": "ada@example.com"}}

        response = client.get("/api/auth/callback/google", follow_redirects=False)

        assert response.headers["location"] == "http://testserver/auth/error?error=OAuthCallback"
        mock_db["sessions"].insert_one.assert_not_awaited()

    def test_provider_error(self, client: TestClient, mock_db, authorize):
        authorize.side_effect = OAuthError(error="access_denied")

        response = client.get("/api/auth/callback/google?error=access_denied", follow_redirects=False)

        assert response.headers["location"] == "http://testserver/auth/error?error=OAuthCallback"
        mock_db["accounts"].find_one.assert_not_awaited()
        mock_db["sessions"].insert_one.assert_not_awaited()

    def test_unknown_provider(self, client: TestClient):
        response = client.get("/api/auth/callback/github", follow_redirects=False)
        assert response.status_code == 404
