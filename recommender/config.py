"""
Configuration module for the product recommender backend.

Loads environment variables once at import time and reports missing settings.
"""
import logging
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    """Application settings loaded from environment variables."""

    # SerpApi (web search). Optional: without it search is disabled.
    SERPAPI_KEY: str = os.getenv("SERPAPI_KEY", "")
    SERPAPI_URL: str = os.getenv("SERPAPI_URL", "https://serpapi.com/search.json")

    # Google Gemini API
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", ""))
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    # Thinking tokens count toward the output limit; 0 turns thinking off on Flash models
    GEMINI_THINKING_BUDGET: int = int(os.getenv("GEMINI_THINKING_BUDGET", "0"))

    # Outbound call timeouts (seconds)
    SEARCH_TIMEOUT_SECONDS: float = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "8"))
    MODEL_TIMEOUT_SECONDS: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "10"))

    # Application Settings
    PORT: int = int(os.getenv("PORT", "4000"))
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173"
    ).split(",")

    @classmethod
    def validate(cls) -> None:
        """
        Check that the provider keys are configured.

        Raises:
            ValueError: If any provider key is missing.
        """
        provider_settings = {
            "GEMINI_API_KEY": cls.GEMINI_API_KEY,
            "SERPAPI_KEY": cls.SERPAPI_KEY,
        }

        missing = [key for key, value in provider_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# A missing search key only disables search and a missing model key only fails
# recommendation requests, so validation warns instead of stopping startup.
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        logger.warning(f"{e} Recommendations may degrade until the keys are set.")
