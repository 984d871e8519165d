"""
FastAPI routes for the static product catalog.

Endpoints:
- GET /api/products: The catalog a presentation layer renders and sends back
  with POST /api/recommend
"""

from fastapi import APIRouter

from recommender.data.catalog import get_catalog
from recommender.schemas.products import ProductListResponse
from recommender.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["products"]
)


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List catalog products",
    status_code=200,
)
async def list_products() -> ProductListResponse:
    """Return the static catalog in display order."""
    catalog = get_catalog()
    logger.debug(f"Serving catalog with {len(catalog)} products")
    return ProductListResponse(products=list(catalog))
