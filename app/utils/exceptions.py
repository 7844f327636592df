"""Custom exception classes."""


class RecipeAppException(Exception):
    """Base exception for the recipe application."""

    pass


class AuthenticationError(RecipeAppException):
    """Raised when authentication fails."""

    pass


class ValidationError(RecipeAppException):
    """Raised when input validation fails."""

    pass


class InferenceError(RecipeAppException):
    """Raised when a hosted inference API call fails."""

    pass


class RecipeGenerationError(RecipeAppException):
    """Raised when recipe generation fails."""

    pass


class ImageGenerationError(RecipeAppException):
    """Raised when recipe image generation fails."""

    pass


class IngredientValidationError(RecipeAppException):
    """Raised when the ingredient validation call fails."""

    pass
