"""OAuth sign in/out and session endpoints."""

import logging
from typing import Any, Dict
from urllib.parse import urlencode

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from app.api.dependencies import get_auth_options
from app.auth.config import AuthOptions
from app.models.auth import Account, Session, SessionUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _error_redirect(auth_options: AuthOptions, error: str) -> RedirectResponse:
    query = urlencode({"error": error})
    return RedirectResponse(f"{auth_options.base_url}{auth_options.pages.error}?{query}")


def _get_client(auth_options: AuthOptions, provider: str):
    if auth_options.get_provider(provider) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Unknown provider", "detail": provider},
        )
    return auth_options.oauth.create_client(provider)


@router.get("/providers")
async def list_providers(auth_options: AuthOptions = Depends(get_auth_options)) -> Dict[str, Any]:
    """List configured sign-in providers."""
    return {
        p.id: {
            "id": p.id,
            "name": p.name,
            "type": p.type,
            "signinUrl": f"/api/auth/signin/{p.id}",
            "callbackUrl": f"/api/auth/callback/{p.id}",
        }
        for p in auth_options.providers
    }


@router.get("/signin/{provider}")
async def sign_in(
    request: Request,
    provider: str,
    auth_options: AuthOptions = Depends(get_auth_options),
):
    """Start the authorization-code flow with the provider."""
    client = _get_client(auth_options, provider)
    redirect_uri = str(request.url_for("oauth_callback", provider=provider))
    logger.info("Sign in started", extra={"provider": provider})
    return await client.authorize_redirect(request, redirect_uri)


@router.get("/callback/{provider}", name="oauth_callback")
async def oauth_callback(
    request: Request,
    provider: str,
    auth_options: AuthOptions = Depends(get_auth_options),
):
    """
    Finish the authorization-code flow.

    Links the provider account to a user (creating the user on first sign
    in), opens a database session and sets the session cookie.
    """
    client = _get_client(auth_options, provider)
    adapter = auth_options.adapter

    try:
        token = await client.authorize_access_token(request)
    except OAuthError as e:
        logger.warning(f"OAuth callback failed: {e.error}", extra={"provider": provider})
        return _error_redirect(auth_options, "OAuthCallback")

    userinfo = token.get("userinfo") or {}
    provider_account_id = userinfo.get("sub")
    if not provider_account_id:
        logger.warning("OAuth profile without subject", extra={"provider": provider})
        return _error_redirect(auth_options, "OAuthCallback")

    user = await adapter.get_user_by_account(provider, provider_account_id)
    if user is None:
        email = userinfo.get("email")
        if email and await adapter.get_user_by_email(email) is not None:
            # Same email already registered through another account.
            return _error_redirect(auth_options, "OAuthAccountNotLinked")

        user = await adapter.create_user(
            name=userinfo.get("name"),
            email=email,
            image=userinfo.get("picture"),
        )
        await adapter.link_account(
            Account(
                userId=user.id,
                provider=provider,
                providerAccountId=provider_account_id,
                access_token=token.get("access_token"),
                refresh_token=token.get("refresh_token"),
                expires_at=token.get("expires_at"),
                token_type=token.get("token_type"),
                scope=token.get("scope"),
                id_token=token.get("id_token"),
            )
        )

    session = await adapter.create_session(user.id, auth_options.session_max_age)
    logger.info("User signed in", extra={"user_id": user.id, "provider": provider})

    url = await auth_options.callbacks.redirect(str(request.url), auth_options.base_url)
    response = RedirectResponse(url)
    response.set_cookie(
        auth_options.session_cookie_name,
        session.sessionToken,
        max_age=auth_options.session_max_age,
        httponly=True,
        samesite="lax",
        secure=auth_options.secure_cookies,
    )
    return response


@router.api_route("/signout", methods=["GET", "POST"])
async def sign_out(
    request: Request,
    auth_options: AuthOptions = Depends(get_auth_options),
):
    """Delete the current database session and clear the cookie."""
    session_token = request.cookies.get(auth_options.session_cookie_name)
    if session_token:
        await auth_options.adapter.delete_session(session_token)

    url = await auth_options.callbacks.redirect(str(request.url), auth_options.base_url)
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(auth_options.session_cookie_name)
    return response


@router.get("/session")
async def get_session(
    request: Request,
    auth_options: AuthOptions = Depends(get_auth_options),
) -> Dict[str, Any]:
    """Return the current session, or an empty object when signed out."""
    session_token = request.cookies.get(auth_options.session_cookie_name)
    if not session_token:
        return {}

    resolved = await auth_options.adapter.get_session_and_user(session_token)
    if resolved is None:
        return {}

    db_session, user = resolved
    session = Session(
        user=SessionUser(name=user.name, email=user.email, image=user.image),
        expires=db_session.expires,
    )
    session = await auth_options.callbacks.session(session, user)
    return session.model_dump(mode="json")
