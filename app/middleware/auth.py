"""Session cookie authentication."""

from fastapi import Depends, HTTPException, Request, status

from app.api.dependencies import get_auth_options
from app.auth.config import AuthOptions
from app.core.request_context import set_user_id


async def get_current_user_id(
    request: Request,
    auth_options: AuthOptions = Depends(get_auth_options),
) -> str:
    """
    Resolve the session cookie to the signed-in user's id.

    Args:
        request: Incoming request carrying the session cookie
        auth_options: Auth configuration (cookie name and adapter)

    Returns:
        Database id of the signed-in user

    Raises:
        HTTPException: If the cookie is missing or the session is unknown or expired
    """
    session_token = request.cookies.get(auth_options.session_cookie_name)
    if not session_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in.",
        )

    resolved = await auth_options.adapter.get_session_and_user(session_token)
    if resolved is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or invalid.",
        )

    _, user = resolved
    request.state.user_id = user.id
    set_user_id(user.id)
    return user.id
