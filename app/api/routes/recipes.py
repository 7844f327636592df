"""Recipe generation endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from app.api.dependencies import get_recipe_service
from app.middleware.auth import get_current_user_id
from app.middleware.rate_limit import rate_limit_dependency
from app.models.recipe import GeneratedImage, Ingredient, Recipe, RecipeGenerationResult
from app.services.recipe_service import RecipeService
from app.utils.validators import validate_ingredients_list, validate_recipes_list

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/recipes", tags=["recipes"])


class GenerateRecipeRequest(BaseModel):
    """Request body for recipe generation."""

    ingredients: List[Ingredient]
    dietaryPreferences: List[str] = Field(default_factory=list)


class GenerateImagesRequest(BaseModel):
    """Request body for recipe image generation."""

    recipes: List[Recipe]


@router.post("/generate", response_model=RecipeGenerationResult)
async def generate_recipe(
    request: Request,
    body: GenerateRecipeRequest,
    user_id: str = Depends(get_current_user_id),
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeGenerationResult:
    """
    Generate three recipes from a list of ingredients and dietary preferences.
    """
    logger.info(
        "Route /api/recipes/generate called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/api/recipes/generate",
            "params": {
                "ingredients_count": len(body.ingredients),
                "dietary_preferences": body.dietaryPreferences,
            },
        },
    )

    # ValidationError and RecipeGenerationError are mapped by the app-level handler
    ingredients = validate_ingredients_list(body.ingredients)
    return await recipe_service.generate_recipe(ingredients, body.dietaryPreferences, user_id)


@router.post("/images", response_model=List[GeneratedImage])
async def generate_images(
    request: Request,
    body: GenerateImagesRequest,
    user_id: str = Depends(get_current_user_id),
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> List[GeneratedImage]:
    """
    Generate one image per recipe. Fails as a whole if any image fails.
    """
    logger.info(
        "Route /api/recipes/images called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/api/recipes/images",
            "params": {"recipe_names": [r.name for r in body.recipes]},
        },
    )

    recipes = validate_recipes_list(body.recipes)
    return await recipe_service.generate_images(recipes, user_id)
