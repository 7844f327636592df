"""Recipe Pydantic models."""

from typing import List, Optional
from pydantic import BaseModel, Field


class Ingredient(BaseModel):
    """Single ingredient model."""

    name: str = Field(..., description="Ingredient name")
    quantity: str = Field(..., description="Quantity and unit (e.g., '2', '200 g')")


class AdditionalInformation(BaseModel):
    """Free-text extras returned alongside a generated recipe."""

    tips: str = Field("", description="Cooking tips or advice")
    variations: str = Field("", description="Possible variations of the recipe")
    servingSuggestions: str = Field("", description="Suggestions for serving the dish")
    nutritionalInformation: str = Field("", description="Nutritional information about the recipe")


class Recipe(BaseModel):
    """Recipe shape requested from the text model."""

    name: str = Field(..., description="Recipe name")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ingredients with quantities")
    instructions: List[str] = Field(default_factory=list, description="Ordered steps without step numbers")
    dietaryPreference: List[str] = Field(default_factory=list, description="Dietary preferences the recipe follows")
    additionalInformation: AdditionalInformation = Field(
        default_factory=AdditionalInformation, description="Tips, variations and serving notes"
    )

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "name": "Spinach Omelette",
                "ingredients": [
                    {"name": "egg", "quantity": "2"},
                    {"name": "spinach", "quantity": "1 cup"},
                ],
                "instructions": [
                    "Whisk the eggs with a pinch of salt.",
                    "Wilt the spinach in a hot pan, pour in the eggs and fold.",
                ],
                "dietaryPreference": ["vegetarian"],
                "additionalInformation": {
                    "tips": "Keep the heat medium so the eggs stay soft.",
                    "variations": "Add feta or mushrooms.",
                    "servingSuggestions": "Serve with toasted sourdough.",
                    "nutritionalInformation": "About 200 kcal per serving.",
                },
            }
        }


class RecipeGenerationResult(BaseModel):
    """Raw generated recipes plus the id of the logged exchange."""

    recipes: Optional[str] = Field(None, description="Generated text as returned by the model")
    openaiPromptId: str = Field(..., description="Id of the stored prompt/response record")


class GeneratedImage(BaseModel):
    """Image link for a single recipe."""

    imgLink: Optional[str] = Field(None, description="URL of the generated image")
    name: str = Field(..., description="Recipe name")


class ValidationResponse(BaseModel):
    """Ingredient validation verdict parsed from the text model reply."""

    isValid: bool
    possibleVariations: List[str]
