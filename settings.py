# settings.py
"""
Meal Planner API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")
    PORT: int = Field(default=3001)

    # CORS
    CORS_ORIGINS: str = "*"

    # Gemini AI
    GEMINI_API_KEY: Optional[str] = Field(default=None, description="Google Gemini API key")
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash", description="Model used for plan and recipe generation")
    GEMINI_USE_RESPONSE_SCHEMA: bool = Field(
        default=True,
        description="Constrain output with a response schema (JSON mode)"
    )
    GEMINI_MAX_RETRIES: int = Field(
        default=0,
        ge=0,
        le=5,
        description="Extra attempts after a failed generation call (0 = single attempt)"
    )
    GEMINI_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-call timeout for the generation service (unset = no timeout)"
    )

    # Response validation
    STRICT_PLAN_VALIDATION: bool = Field(
        default=False,
        description="Reject plans and recipes that break the mandatory-field contract"
    )

    # Record store
    RECORD_STORE_BACKEND: str = Field(default="mongodb", description="mongodb or memory")
    DATABASE_URL: str = Field(default="mongodb://localhost:27017", description="MongoDB connection string")
    DATABASE_NAME: str = Field(default="meal_planner")

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def uses_mongodb(self) -> bool:
        """Check if saved plans and favorites live in MongoDB."""
        return self.RECORD_STORE_BACKEND.lower() == "mongodb"

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY must be set")
        if self.RECORD_STORE_BACKEND.lower() not in ("mongodb", "memory"):
            raise ValueError("RECORD_STORE_BACKEND must be 'mongodb' or 'memory'")
        if self.uses_mongodb and not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set when using the MongoDB record store")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
