"""Shared API dependencies.

Clients are created once in the startup hook and kept on ``app.state``;
these providers hand them to route handlers.
"""

from fastapi import Request

from app.auth.config import AuthOptions
from app.config import settings
from app.services.recipe_service import RecipeService


def get_auth_options(request: Request) -> AuthOptions:
    """Get the auth configuration built at startup."""
    return request.app.state.auth_options


def get_recipe_service(request: Request) -> RecipeService:
    """Get recipe service instance wired to the shared clients."""
    state = request.app.state
    return RecipeService(
        text_client=state.text_client,
        image_client=state.image_client,
        response_logger=state.response_logger,
        settings=settings,
    )
