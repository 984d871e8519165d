"""
FastAPI application entry point for the product recommender backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recommender.config import settings
from recommender.routes.health import router as health_router
from recommender.routes.products import router as products_router
from recommender.routes.recommendations import router as recommendations_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ORIGINS (explicit list)
    - Anything else: Allows all origins for local frontend development

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = [origin.strip() for origin in settings.CORS_ORIGINS if origin.strip()]
        logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Product Recommender API",
    description="Catalog recommendations grounded in live web search and Gemini",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


def _jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (e.g. exception objects) from validation errors."""
    return [
        {key: value for key, value in err.items() if key in ("type", "loc", "msg", "input")}
        for err in exc.errors()
    ]


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    Keeps the {"error": ...} body shape used by every other failure.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": _jsonable_errors(exc),
        }
    )


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(products_router)
app.include_router(recommendations_router)

logger.info("FastAPI app initialized successfully")
