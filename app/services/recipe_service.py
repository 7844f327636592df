"""Recipe generation, recipe image generation and ingredient validation.

Key behavior:
- Every successful exchange is logged through ``ResponseLogger`` (best effort).
- Failures from the hosted endpoints collapse into one generic error per operation.
- Image batches are all-or-nothing: one failed image fails the batch.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import List, Optional, Sequence

from openai.types import ImagesResponse
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.models.recipe import (
    GeneratedImage,
    Ingredient,
    Recipe,
    RecipeGenerationResult,
    ValidationResponse,
)
from app.services.inference_clients import ImageGenerationClient, TextGenerationClient
from app.services.prompt_service import (
    image_batch_log_prompt,
    image_generation_prompt,
    ingredient_validation_prompt,
    recipe_generation_prompt,
)
from app.services.response_logger import ResponseLogger
from app.utils.exceptions import (
    ImageGenerationError,
    IngredientValidationError,
    RecipeGenerationError,
)

logger = logging.getLogger(__name__)

NULL_PROMPT_ID = "null-prompt-id"

RECIPE_PARAMETERS = {
    "max_length": 1500,
    "do_sample": True,
    "top_k": 50,
    "top_p": 0.95,
    "num_return_sequences": 1,
}

VALIDATION_PARAMETERS = {
    "max_length": 200,
    "do_sample": False,
    "top_k": 50,
    "top_p": 0.95,
    "num_return_sequences": 1,
}


class RecipeService:
    """Service composing prompts, hosted inference calls and response logging."""

    def __init__(
        self,
        text_client: TextGenerationClient,
        image_client: ImageGenerationClient,
        response_logger: ResponseLogger,
        settings: Settings,
    ) -> None:
        self.text_client = text_client
        self.image_client = image_client
        self.response_logger = response_logger
        self.settings = settings

    # ---------------------------------------------------------------------
    # Recipes
    # ---------------------------------------------------------------------

    async def generate_recipe(
        self,
        ingredients: Sequence[Ingredient],
        dietary_preferences: Sequence[str],
        user_id: str,
    ) -> RecipeGenerationResult:
        """
        Ask the text model for three recipes.

        The generated text is returned untouched; nothing checks it against
        the ``Recipe`` shape.

        Raises:
            RecipeGenerationError: If the hosted call fails
        """
        try:
            prompt = recipe_generation_prompt(ingredients, dietary_preferences)
            logger.info(
                "Generating recipes from %d ingredients", len(ingredients),
                extra={"user_id": user_id, "preferences": list(dietary_preferences)},
            )

            response = await self.text_client.text_generation(
                model=self.settings.text_model,
                inputs=prompt,
                parameters=RECIPE_PARAMETERS,
            )
            generated_text = response.get("generated_text")

            prompt_id = await self.response_logger.save(user_id, prompt, response)

            return RecipeGenerationResult(
                recipes=generated_text,
                openaiPromptId=prompt_id or NULL_PROMPT_ID,
            )
        except Exception as e:
            logger.error("Failed to generate recipe: %s", str(e), exc_info=True)
            raise RecipeGenerationError("Failed to generate recipe") from e

    # ---------------------------------------------------------------------
    # Images
    # ---------------------------------------------------------------------

    async def _generate_image(self, prompt: str, semaphore: asyncio.Semaphore) -> ImagesResponse:
        async with semaphore:
            return await asyncio.wait_for(
                self.image_client.generate(
                    model=self.settings.image_model,
                    prompt=prompt,
                    n=1,
                    size=self.settings.image_size,
                ),
                timeout=self.settings.image_timeout_seconds,
            )

    async def generate_images(self, recipes: Sequence[Recipe], user_id: str) -> List[GeneratedImage]:
        """
        Generate one image per recipe, concurrently.

        At most ``image_concurrency`` requests run at once and each is bounded
        by ``image_timeout_seconds``. Results keep the input order.

        Raises:
            ImageGenerationError: If any single image request fails or times out
        """
        if not recipes:
            return []

        semaphore = asyncio.Semaphore(max(1, self.settings.image_concurrency))
        tasks = [
            asyncio.ensure_future(
                self._generate_image(image_generation_prompt(r.name, r.ingredients), semaphore)
            )
            for r in recipes
        ]

        try:
            logger.info("Generating %d recipe images", len(tasks), extra={"user_id": user_id})
            images: List[ImagesResponse] = await asyncio.gather(*tasks)

            recipe_names = [r.name for r in recipes]
            await self.response_logger.save(user_id, image_batch_log_prompt(recipe_names), images)

            return [
                GeneratedImage(imgLink=image.data[0].url if image.data else None, name=recipe.name)
                for image, recipe in zip(images, recipes)
            ]
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error("Error generating image: %s", str(e) or type(e).__name__, exc_info=True)
            raise ImageGenerationError("Failed to generate image") from e

    # ---------------------------------------------------------------------
    # Ingredient validation
    # ---------------------------------------------------------------------

    async def validate_ingredient(self, ingredient_name: str, user_id: str) -> Optional[ValidationResponse]:
        """
        Ask the text model whether ``ingredient_name`` is a real ingredient.

        Returns:
            Parsed ``ValidationResponse``, or None when the reply is empty or
            is not JSON of the expected shape

        Raises:
            IngredientValidationError: If the hosted call fails
        """
        prompt = ingredient_validation_prompt(ingredient_name)
        try:
            response = await self.text_client.text_generation(
                model=self.settings.text_model,
                inputs=prompt,
                parameters=VALIDATION_PARAMETERS,
            )
        except Exception as e:
            logger.error("Failed to validate ingredient: %s", str(e), exc_info=True)
            raise IngredientValidationError("Failed to validate ingredient") from e

        logger.debug("Raw validation response: %s", response)

        validation_text = response.get("generated_text")
        if not validation_text or not isinstance(validation_text, str):
            logger.error("No response text received from text generation")
            return None

        try:
            result = ValidationResponse.model_validate(json.loads(validation_text.strip()), strict=True)
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("Failed to parse JSON response: %s", str(e))
            return None

        await self.response_logger.save(user_id, prompt, response)
        return result
