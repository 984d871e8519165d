"""
FastAPI routes for the recommendation endpoint.

Endpoints:
- POST /api/recommend: Recommend catalog products for a free-text preference
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from recommender.data.catalog import get_catalog
from recommender.schemas.recommendations import (
    ErrorResponse,
    RecommendationQueryRequest,
    RecommendationResponse,
)
from recommender.services.model_service import (
    LLMError,
    ModelNotConfiguredError,
    ModelTimeoutError,
)
from recommender.services.recommendation_service import recommend

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/api",
    tags=["recommendations"]
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _llm_error_status(exc: LLMError) -> int:
    if isinstance(exc, ModelNotConfiguredError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, ModelTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_502_BAD_GATEWAY


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/recommend",
    response_model=RecommendationResponse,
    response_model_exclude_none=True,
    status_code=200,
    summary="Recommend catalog products",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or blank query"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
        502: {"model": ErrorResponse, "description": "Gemini returned an error"},
        503: {"model": ErrorResponse, "description": "Gemini is not configured"},
        504: {"model": ErrorResponse, "description": "Gemini timed out"},
    },
    description="""
    Recommends products from the supplied catalog (or the static catalog when
    `products` is omitted) for a free-text preference.

    **Flow:**
    1. Live web search via SerpApi (failures are non-fatal)
    2. Single Gemini call with query, catalog and web snippets
    3. JSON recovered from the model's free-form reply
    4. Deterministic fallback ranking if no JSON can be recovered

    Fallback responses carry a fixed `reason`, the search snippets as
    `sources` and a `debug` object with the text candidates tried.
    """
)
async def recommend_endpoint(
    request: Optional[RecommendationQueryRequest] = None,
) -> Union[RecommendationResponse, JSONResponse]:
    """
    Recommendation endpoint.

    - Parse/Validate: Pydantic RecommendationQueryRequest
    - Reject missing/blank query with 400
    - Call service layer
    - Map provider failures to 5xx {"error": ...}
    """
    if request is None or not request.query or not request.query.strip():
        logger.info("POST /api/recommend rejected: missing query")
        return _error(status.HTTP_400_BAD_REQUEST, "missing query")

    products = request.products if request.products is not None else list(get_catalog())

    logger.info(f"POST /api/recommend called, query='{request.query[:50]}'")

    try:
        return await recommend(request.query, products)
    except LLMError as e:
        logger.error(f"Gemini call failed: {e}")
        return _error(_llm_error_status(e), str(e))
    except Exception as e:
        logger.error(f"SERVER ERROR: {e}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
