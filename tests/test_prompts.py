"""Tests for prompt generation."""

from app.models.recipe import Ingredient
from app.services.prompt_service import (
    image_batch_log_prompt,
    image_generation_prompt,
    ingredient_validation_prompt,
    recipe_generation_prompt,
)


def test_recipe_prompt_is_deterministic():
    """Same inputs always give byte-identical prompts."""
    ingredients = [Ingredient(name="egg", quantity="2"), Ingredient(name="spinach", quantity="1 cup")]
    first = recipe_generation_prompt(ingredients, ["vegetarian"])
    second = recipe_generation_prompt(list(ingredients), ["vegetarian"])
    assert first == second


def test_recipe_prompt_embeds_compact_ingredient_json():
    """Ingredients are serialized like JSON.stringify."""
    prompt = recipe_generation_prompt([Ingredient(name="egg", quantity="2")], [])
    assert 'I have the following ingredients: [{"name":"egg","quantity":"2"}] .' in prompt
    assert "three different delicious recipes" in prompt
    assert '"additionalInformation"' in prompt


def test_recipe_prompt_with_preferences():
    """Preferences are comma joined without spaces."""
    prompt = recipe_generation_prompt(
        [Ingredient(name="tofu", quantity="200 g")], ["vegan", "gluten-free"]
    )
    assert "and dietary preferences: vegan,gluten-free." in prompt


def test_recipe_prompt_without_preferences_omits_clause():
    """No preferences means no preference clause."""
    prompt = recipe_generation_prompt([Ingredient(name="egg", quantity="2")], [])
    assert "dietary preferences:" not in prompt


def test_recipe_prompt_keeps_non_ascii_ingredients():
    """Non-ASCII names are embedded as-is."""
    prompt = recipe_generation_prompt([Ingredient(name="jalapeño", quantity="1")], [])
    assert '"jalapeño"' in prompt


def test_image_prompt_lists_ingredient_names():
    """Image prompt names the dish and every ingredient."""
    prompt = image_generation_prompt(
        "Shakshuka",
        [Ingredient(name="egg", quantity="4"), Ingredient(name="tomato", quantity="3")],
    )
    assert prompt == (
        "Create an image of a delicious Shakshuka made of these ingredients: egg, tomato. "
        "The image should be visually appealing and showcase the dish in an appetizing manner."
    )


def test_validation_prompt_mentions_ingredient_and_shape():
    """Validation prompt contains the ingredient and the expected keys."""
    prompt = ingredient_validation_prompt("tofu")
    assert "tofu" in prompt
    assert "isValid" in prompt
    assert "possibleVariations" in prompt
    assert prompt == ingredient_validation_prompt("tofu")


def test_image_batch_log_prompt():
    """Batch log prompt joins recipe names with ' ,'."""
    assert (
        image_batch_log_prompt(["Omelette", "Frittata"])
        == "Image generation for recipe names Omelette ,Frittata (note: not exact prompt)"
    )
