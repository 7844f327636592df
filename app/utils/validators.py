"""Input validation utilities."""

from typing import List

from app.models.recipe import Ingredient, Recipe
from app.utils.exceptions import ValidationError

MAX_INGREDIENTS = 50
MAX_RECIPES = 10
MAX_NAME_LENGTH = 200


def validate_ingredient_name(name: str) -> str:
    """
    Validate a single ingredient name.

    Args:
        name: Ingredient name as typed by the user

    Returns:
        Stripped ingredient name

    Raises:
        ValidationError: If the name is empty or too long
    """
    if not isinstance(name, str):
        raise ValidationError("Ingredient name must be a string")

    name = name.strip()
    if not name:
        raise ValidationError("Ingredient name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Ingredient name cannot exceed {MAX_NAME_LENGTH} characters")

    return name


def validate_ingredients_list(ingredients: List[Ingredient]) -> List[Ingredient]:
    """
    Validate ingredients list.

    Args:
        ingredients: List of ingredients with quantities

    Returns:
        Ingredients with stripped names, blank names dropped

    Raises:
        ValidationError: If ingredients list is invalid
    """
    if not ingredients:
        raise ValidationError("Ingredients list cannot be empty")

    if len(ingredients) > MAX_INGREDIENTS:
        raise ValidationError(f"Ingredients list cannot exceed {MAX_INGREDIENTS} items")

    validated = []
    for ingredient in ingredients:
        name = ingredient.name.strip()
        if not name:
            continue
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Ingredient name cannot exceed {MAX_NAME_LENGTH} characters")
        validated.append(Ingredient(name=name, quantity=ingredient.quantity.strip()))

    if not validated:
        raise ValidationError("At least one valid ingredient is required")

    return validated


def validate_recipes_list(recipes: List[Recipe]) -> List[Recipe]:
    """
    Validate the recipes an image batch is requested for.

    Raises:
        ValidationError: If the list is empty, too long or has unnamed recipes
    """
    if not recipes:
        raise ValidationError("Recipes list cannot be empty")

    if len(recipes) > MAX_RECIPES:
        raise ValidationError(f"Recipes list cannot exceed {MAX_RECIPES} items")

    if any(not recipe.name.strip() for recipe in recipes):
        raise ValidationError("Every recipe needs a name")

    return recipes
