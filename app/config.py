"""Application configuration using pydantic-settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    openai_api_key: str = ""
    huggingface_api_key: str = ""

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: int = 60  # seconds

    # Rate Limiting
    rate_limit_per_hour: int = 100

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # Text generation (Hugging Face Inference API)
    hf_api_url: str = "https://api-inference.huggingface.co"
    text_model: str = "EleutherAI/gpt-neo-2.7B"

    # Image generation (OpenAI Images)
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_concurrency: int = 4
    image_timeout_seconds: float = 120.0

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "recipes"

    # Auth
    google_client_id: str = ""
    google_client_secret: str = ""
    session_secret: str = "change-me-in-production"
    session_max_age: int = 30 * 24 * 60 * 60  # 30 days
    base_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
