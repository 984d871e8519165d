"""
Service layer for the product recommender.

Services act as the glue between routes (HTTP layer) and the two external
providers (SerpApi, Gemini).
"""

from .model_service import (
    LLMError,
    ModelAPIError,
    ModelNotConfiguredError,
    ModelTimeoutError,
)
from .recommendation_service import recommend

__all__ = [
    "LLMError",
    "ModelAPIError",
    "ModelNotConfiguredError",
    "ModelTimeoutError",
    "recommend",
]
