"""
Pydantic schemas for the recommendation endpoint.

These models define the request/response contracts for the web-grounded
recommendation flow (SerpApi snippets + Gemini + fallback heuristic).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from recommender.schemas.products import Product

# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationQueryRequest(BaseModel):
    """
    Request to recommend catalog products for a free-text preference.

    `query` is optional at the schema level so the route can answer a
    missing or blank query with 400 {"error": "missing query"} instead of
    a generic validation error.
    """
    query: Optional[str] = Field(
        None,
        description="User's natural language preference",
        examples=["I want a phone under $500"]
    )
    products: Optional[List[Product]] = Field(
        None,
        description=(
            "Catalog to recommend from. Defaults to the static catalog "
            "served by GET /api/products."
        )
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class SearchSnippet(BaseModel):
    """Condensed summary of one web search result, embedded in the prompt."""
    title: Optional[str] = Field(
        None,
        description="Result title, or 'search-error' for a failed search"
    )
    snippet: str = Field(
        "",
        description="Result snippet or description, or the search error message"
    )
    link: Optional[str] = Field(
        None,
        description="Result URL (falls back to the provider's source field)"
    )


class SourceCitation(BaseModel):
    """
    One citation in a recommendation's `sources`.

    Model-provided citations carry title/link; fallback responses cite the
    search snippets directly, so `snippet` is kept when present.
    """
    title: Optional[str] = None
    link: Optional[str] = None
    snippet: Optional[str] = None


class RecommendationResponse(BaseModel):
    """
    Final recommendation payload.

    `recommended_ids` is always a list but is not guaranteed to reference
    products in the catalog; clients must filter against their catalog.
    """
    recommended_ids: List[str] = Field(
        default_factory=list,
        description="Recommended product ids, best first",
        examples=[["p1", "p3"]]
    )
    reason: str = Field(
        "",
        description="Short explanation of the recommendation"
    )
    sources: List[SourceCitation] = Field(
        default_factory=list,
        description="Web sources backing the recommendation"
    )
    debug: Optional[Dict[str, Any]] = Field(
        None,
        description="Diagnostics, present only when the fallback heuristic answered"
    )


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response of the endpoint."""
    error: str = Field(
        ...,
        examples=["missing query", "GEMINI_API_KEY not set in server environment."]
    )
