"""
Health check route for the product recommender.

This endpoint is PUBLIC and never calls SerpApi or Gemini.
"""

from fastapi import APIRouter

from recommender.schemas.health import HealthResponse
from recommender.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Returns a simple status indicator for monitoring and load balancing."
    ),
    status_code=200,
    tags=["system"],
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "product-recommender"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
