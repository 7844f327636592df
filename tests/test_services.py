"""Tests for input validators and logging configuration."""

import json
import logging

import pytest

from app.models.recipe import Ingredient, Recipe
from app.utils.exceptions import ValidationError
from app.utils.logging_config import JSONFormatter
from app.utils.validators import (
    validate_ingredient_name,
    validate_ingredients_list,
    validate_recipes_list,
)


def test_validate_ingredient_name_strips():
    """Test ingredient name validation trims whitespace."""
    assert validate_ingredient_name("  tofu ") == "tofu"


def test_validate_ingredient_name_empty():
    """Test ingredient name validation rejects blanks."""
    with pytest.raises(ValidationError):
        validate_ingredient_name("   ")


def test_validate_ingredient_name_too_long():
    """Test ingredient name validation rejects very long names."""
    with pytest.raises(ValidationError):
        validate_ingredient_name("a" * 201)


def test_validate_ingredients_list_valid():
    """Test ingredients list validation with valid list."""
    ingredients = [Ingredient(name="chicken", quantity="500 g"), Ingredient(name="rice", quantity="1 cup")]
    assert validate_ingredients_list(ingredients) == ingredients


def test_validate_ingredients_list_drops_blank_names():
    """Test ingredients list validation skips blank entries."""
    result = validate_ingredients_list([Ingredient(name=" ", quantity="1"), Ingredient(name="egg", quantity="2")])
    assert [i.name for i in result] == ["egg"]


def test_validate_ingredients_list_empty():
    """Test ingredients list validation with empty list."""
    with pytest.raises(ValidationError):
        validate_ingredients_list([])


def test_validate_ingredients_list_too_long():
    """Test ingredients list validation caps the list size."""
    with pytest.raises(ValidationError):
        validate_ingredients_list([Ingredient(name=f"i{n}", quantity="1") for n in range(51)])


def test_validate_recipes_list_requires_names():
    """Test recipes list validation rejects unnamed recipes."""
    with pytest.raises(ValidationError):
        validate_recipes_list([Recipe(name=" ")])


def test_json_formatter_includes_extra_fields():
    """Log lines are JSON with extra fields merged in."""
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.request_id = "req-1"
    record.route = "/api/recipes/generate"

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "hello world"
    assert data["severity"] == "INFO"
    assert data["request_id"] == "req-1"
    assert data["route"] == "/api/recipes/generate"
