"""Prompt generation for recipe, image and ingredient validation requests."""

import json
from typing import List, Sequence

from app.models.recipe import Ingredient

RECIPE_JSON_FORMAT = """[
    {
        "name": "Recipe Name",
        "ingredients": [
            {"name": "Ingredient 1", "quantity": "quantity and unit"},
            {"name": "Ingredient 2", "quantity": "quantity and unit"},
            ...
        ],
        "instructions": [
            "Step 1",
            "Step 2",
            ...
        ],
        "dietaryPreference": ["Preference 1", "Preference 2", ...],
        "additionalInformation": {
            "tips": "Some cooking tips or advice.",
            "variations": "Possible variations of the recipe.",
            "servingSuggestions": "Suggestions for serving the dish.",
            "nutritionalInformation": "Nutritional information about the recipe."
        }
    },
    ...
]"""


def _ingredients_json(ingredients: Sequence[Ingredient]) -> str:
    # Compact separators keep the output identical to a browser-side JSON.stringify.
    payload = [{"name": i.name, "quantity": i.quantity} for i in ingredients]
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def recipe_generation_prompt(
    ingredients: Sequence[Ingredient], dietary_preferences: Sequence[str]
) -> str:
    """Create a prompt asking for three recipes in a fixed JSON shape."""
    preferences = (
        f"and dietary preferences: {','.join(dietary_preferences)}" if dietary_preferences else ""
    )
    return (
        "\n"
        f"I have the following ingredients: {_ingredients_json(ingredients)} {preferences}. "
        "Please provide me with three different delicious recipes. "
        "The response should be in the following JSON format without any additional text or markdown:\n"
        f"{RECIPE_JSON_FORMAT}\n"
        "Please ensure the recipes are diverse and use the ingredients listed. "
        "The recipes should follow the dietary preferences provided. "
        "The instructions should be ordered but not include the step numbers.\n"
    )


def image_generation_prompt(recipe_name: str, ingredients: Sequence[Ingredient]) -> str:
    """Create a single-sentence image prompt for a recipe."""
    all_ingredients = ", ".join(ingredient.name for ingredient in ingredients)
    return (
        f"Create an image of a delicious {recipe_name} made of these ingredients: {all_ingredients}. "
        "The image should be visually appealing and showcase the dish in an appetizing manner."
    )


def ingredient_validation_prompt(ingredient_name: str) -> str:
    """Create a prompt asking whether an ingredient is real and for related variations."""
    return (
        "You are a food ingredient validation assistant. "
        f"Given this ingredient name: {ingredient_name}, "
        "you will respond with a JSON object in the following format:\n"
        "\n"
        "{\n"
        '  "isValid": true/false,\n'
        '  "possibleVariations": ["variation1", "variation2", "variation3"]\n'
        "}\n"
        "\n"
        'The "isValid" field should be true if the ingredient is commonly used in recipes and false otherwise. '
        'The "possibleVariations" field should be an array containing 2 or 3 variations or related ingredients '
        "to the provided ingredient name. If no variations or related ingredients are real and commonly used, "
        "return an empty array.\n"
        "\n"
        "Do not include any Markdown formatting or code blocks in your response. Return only valid JSON."
    )


def image_batch_log_prompt(recipe_names: List[str]) -> str:
    """Summary prompt stored with a batch of image generations."""
    return f"Image generation for recipe names {' ,'.join(recipe_names)} (note: not exact prompt)"
