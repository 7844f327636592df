"""Pydantic models."""

from app.models.auth import Account, DatabaseSession, Session, SessionUser, User
from app.models.recipe import (
    AdditionalInformation,
    GeneratedImage,
    Ingredient,
    Recipe,
    RecipeGenerationResult,
    ValidationResponse,
)

__all__ = [
    "Account",
    "AdditionalInformation",
    "DatabaseSession",
    "GeneratedImage",
    "Ingredient",
    "Recipe",
    "RecipeGenerationResult",
    "Session",
    "SessionUser",
    "User",
    "ValidationResponse",
]
