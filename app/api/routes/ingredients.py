"""Ingredient validation endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from app.api.dependencies import get_recipe_service
from app.middleware.auth import get_current_user_id
from app.middleware.rate_limit import rate_limit_dependency
from app.models.recipe import ValidationResponse
from app.services.recipe_service import RecipeService
from app.utils.validators import validate_ingredient_name

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


class ValidateIngredientRequest(BaseModel):
    """Request body for ingredient validation."""

    ingredientName: str


@router.post("/validate", response_model=Optional[ValidationResponse])
async def validate_ingredient(
    request: Request,
    body: ValidateIngredientRequest,
    user_id: str = Depends(get_current_user_id),
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> Optional[ValidationResponse]:
    """
    Check whether an ingredient name is real. Returns null when the model
    reply could not be parsed.
    """
    logger.info(
        "Route /api/ingredients/validate called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/api/ingredients/validate",
            "params": {"ingredient_name": body.ingredientName[:100]},
        },
    )

    name = validate_ingredient_name(body.ingredientName)
    return await recipe_service.validate_ingredient(name, user_id)
