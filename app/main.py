"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from app.api.routes import auth, health, ingredients, recipes
from app.auth.config import build_auth_options
from app.config import settings
from app.core.request_context import get_request_id
from app.db.mongo import create_mongo_client, get_database
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import get_rate_limit_exceeded_handler, limiter
from app.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from app.services.inference_clients import ImageGenerationClient, TextGenerationClient
from app.services.response_logger import ResponseLogger
from app.utils.exceptions import (
    AuthenticationError,
    ImageGenerationError,
    InferenceError,
    IngredientValidationError,
    RecipeAppException,
    RecipeGenerationError,
    ValidationError,
)
from app.utils.logging_config import setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Recipe Generator API",
    description="Recipe, recipe image and ingredient validation API backed by hosted models",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add rate limiter to app
app.state.limiter = limiter

# Add exception handler for rate limiting
app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())


# Add validation error handler for better error messages
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()

    logger.warning(
        f"Validation error: {str(exc)}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors(),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": exc.errors(),
            "request_id": request_id,
            "message": "Request validation failed. Check the 'detail' field for specific errors.",
        },
    )


# Global exception handler
@app.exception_handler(RecipeAppException)
async def recipe_app_exception_handler(request: Request, exc: RecipeAppException) -> JSONResponse:
    """Map domain exceptions raised by route handlers to JSON error responses."""
    request_id = get_request_id()

    if isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_message = "Authentication failed"
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Validation error"
    elif isinstance(exc, RecipeGenerationError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Failed to generate recipe"
    elif isinstance(exc, ImageGenerationError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Failed to generate image"
    elif isinstance(exc, IngredientValidationError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Failed to validate ingredient"
    elif isinstance(exc, InferenceError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Inference API error"
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"

    logger.error(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "exception": str(exc)},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


# Add middleware (order matters!)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
# Holds the OAuth state between the sign-in redirect and the callback.
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=settings.base_url.startswith("https://"),
)
setup_compression(app)
setup_cors(app)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(recipes.router)
app.include_router(ingredients.router)


@app.on_event("startup")
async def startup_event():
    """Construct the shared clients once and keep them on app.state."""
    logger.info("Recipe Generator API starting up...")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Rate limit: {settings.rate_limit_per_hour} requests/hour")

    app.state.mongo_client = create_mongo_client(settings.mongodb_uri)
    app.state.db = get_database(app.state.mongo_client, settings.mongodb_db)
    app.state.response_logger = ResponseLogger.from_database(app.state.db)
    app.state.text_client = TextGenerationClient(
        api_key=settings.huggingface_api_key,
        base_url=settings.hf_api_url,
        timeout=settings.http_timeout,
    )
    app.state.image_client = ImageGenerationClient(api_key=settings.openai_api_key)
    app.state.auth_options = build_auth_options(settings, app.state.db)


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared clients."""
    logger.info("Recipe Generator API shutting down...")
    await app.state.text_client.aclose()
    await app.state.image_client.aclose()
    app.state.mongo_client.close()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Recipe Generator API",
        "version": "1.0.0",
        "docs": "/docs",
    }
