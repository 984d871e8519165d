"""
Web Search Service - SerpApi

Fetches live Google results from SerpApi to ground the Gemini prompt.

Search is best-effort: every failure is returned as a provider error dict
({"error": "..."}) instead of being raised, and a missing SERPAPI_KEY simply
disables search.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from recommender.config import settings
from recommender.schemas.recommendations import SearchSnippet
from recommender.utils.constants import SEARCH_ERROR_TITLE, SEARCH_RESULT_LIMIT

logger = logging.getLogger(__name__)


def is_provider_error(payload: Any) -> bool:
    """True when a provider call was substituted by an {"error": ...} value."""
    return isinstance(payload, dict) and isinstance(payload.get("error"), str)


async def search_web(query: str) -> Dict[str, Any]:
    """
    Run a SerpApi Google search for the user's query.

    Args:
        query: User's free-text preference (sent as-is, URL-encoded by httpx)

    Returns:
        The SerpApi JSON payload, {} when search is disabled, or
        {"error": "..."} when the call failed
    """
    if not settings.SERPAPI_KEY:
        logger.warning("SERPAPI_KEY not configured. Web search is disabled.")
        return {}

    params = {"q": query, "api_key": settings.SERPAPI_KEY}

    try:
        return await asyncio.wait_for(
            _fetch(params),
            timeout=settings.SEARCH_TIMEOUT_SECONDS,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        return {"error": f"SerpApi fetch error: timed out after {settings.SEARCH_TIMEOUT_SECONDS} seconds"}
    except (httpx.HTTPError, ValueError) as e:
        # ValueError covers a 2xx body that is not JSON
        return {"error": f"SerpApi fetch error: {e}"}


async def _fetch(params: Dict[str, str]) -> Dict[str, Any]:
    # httpx timeouts apply per connect/read/write step; the caller bounds the whole call
    async with httpx.AsyncClient(timeout=settings.SEARCH_TIMEOUT_SECONDS) as client:
        response = await client.get(settings.SERPAPI_URL, params=params)

        if not response.is_success:
            return {"error": f"SerpApi HTTP {response.status_code}: {response.text}"}

        return response.json()


def build_snippets(payload: Any) -> List[SearchSnippet]:
    """
    Project a search payload into at most SEARCH_RESULT_LIMIT prompt snippets.

    A provider error becomes a single 'search-error' snippet carrying the
    error message, so the failure stays visible to the model and the caller.
    """
    if is_provider_error(payload):
        return [SearchSnippet(title=SEARCH_ERROR_TITLE, snippet=payload["error"])]

    results = payload.get("organic_results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        return []

    snippets: List[SearchSnippet] = []
    for item in results[:SEARCH_RESULT_LIMIT]:
        if not isinstance(item, dict):
            continue
        snippets.append(SearchSnippet(
            title=_as_text(item.get("title")),
            snippet=_as_text(item.get("snippet")) or _as_text(item.get("description")) or "",
            link=_as_text(item.get("link")) or _as_text(item.get("source")),
        ))
    return snippets


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
