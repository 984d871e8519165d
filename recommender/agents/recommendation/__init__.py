"""
Recommendation prompt templates.

The service layer is in:
- recommender/services/recommendation_service.py
"""

from recommender.agents.recommendation.prompts import (
    RECOMMENDATION_PROMPT_TEMPLATE,
    build_recommendation_prompt,
)

__all__ = [
    "RECOMMENDATION_PROMPT_TEMPLATE",
    "build_recommendation_prompt",
]
