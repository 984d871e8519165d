"""
Recommendation Service - SerpApi snippets + Gemini + heuristic fallback

Architecture:
- Pattern: Retrieval-augmented single LLM call
- Web Search: SerpApi (non-fatal, failures become a 'search-error' snippet)
- Model: Gemini via the Google Gen AI SDK (failures are fatal, raised as LLMError)
- Output: JSON recovered from free text (see services/extraction.py)
- Fallback: deterministic catalog ranking when no JSON can be recovered

Flow:
1. search_web(query) -> build_snippets
2. build_recommendation_prompt(query, products, snippets)
3. generate_content(prompt)
4. collect_text_candidates -> first accepted structured value
5. Fallback heuristic with debug payload when nothing is accepted
"""

import logging
from typing import Any, Dict, List, Sequence

from recommender.agents.recommendation.prompts import build_recommendation_prompt
from recommender.schemas.products import Product
from recommender.schemas.recommendations import (
    RecommendationResponse,
    SearchSnippet,
    SourceCitation,
)
from recommender.services.extraction import (
    collect_text_candidates,
    find_structured_recommendation,
)
from recommender.services.fallback import fallback_recommendation
from recommender.services.model_service import generate_content
from recommender.services.search_service import (
    build_snippets,
    is_provider_error,
    search_web,
)
from recommender.utils.constants import DEBUG_CANDIDATE_LIMIT, FALLBACK_REASON

logger = logging.getLogger(__name__)


def _clean_sources(raw_sources: Any) -> List[SourceCitation]:
    """
    Keep only well-formed citations from model output.

    An entry is kept when it is an object with a string title or link.
    Non-string fields are cleared and unknown keys are dropped.
    """
    if not isinstance(raw_sources, list):
        return []

    sources: List[SourceCitation] = []
    for entry in raw_sources:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title")
        link = entry.get("link")
        if not isinstance(title, str) and not isinstance(link, str):
            continue
        snippet = entry.get("snippet")
        sources.append(SourceCitation(
            title=title if isinstance(title, str) else None,
            link=link if isinstance(link, str) else None,
            snippet=snippet if isinstance(snippet, str) else None,
        ))

    if len(sources) < len(raw_sources):
        logger.info(f"Dropped {len(raw_sources) - len(sources)} malformed source entries")
    return sources


def _clean_ids(raw_ids: List[Any]) -> List[str]:
    """Keep string and integer ids; bools, nulls and nested values are dropped."""
    return [
        str(i) for i in raw_ids
        if isinstance(i, (str, int)) and not isinstance(i, bool)
    ]


def _to_response(parsed: Dict[str, Any]) -> RecommendationResponse:
    """Map an accepted structured value to the response model."""
    reason = parsed.get("reason")
    return RecommendationResponse(
        recommended_ids=_clean_ids(parsed["recommended_ids"]),
        reason=reason if isinstance(reason, str) else "",
        sources=_clean_sources(parsed.get("sources")),
    )


def _snippets_as_sources(snippets: Sequence[SearchSnippet]) -> List[SourceCitation]:
    return [SourceCitation(**s.model_dump()) for s in snippets]


async def recommend(query: str, products: Sequence[Product]) -> RecommendationResponse:
    """
    Recommend catalog products for a free-text preference.

    Args:
        query: Non-blank user preference (validated by the route)
        products: Catalog to recommend from

    Returns:
        RecommendationResponse from Gemini, or from the fallback heuristic
        when Gemini output has no usable JSON

    Raises:
        LLMError: Gemini is not configured, timed out, or failed
    """
    logger.info(f"recommend called: query='{query[:50]}', catalog_size={len(products)}")

    web = await search_web(query)
    if is_provider_error(web):
        logger.warning(f"Web search failed: {web['error']}")
    else:
        logger.info(f"Web search completed: got_results={bool(web)}")
    snippets = build_snippets(web)

    prompt = build_recommendation_prompt(query, products, snippets)
    response = await generate_content(prompt)

    candidates = collect_text_candidates(response)
    parsed = find_structured_recommendation(candidates)

    if parsed is not None:
        result = _to_response(parsed)
        logger.info(f"Returning {len(result.recommended_ids)} model recommendations")
        return result

    tried = candidates[:DEBUG_CANDIDATE_LIMIT]
    logger.warning(f"Could not parse JSON from Gemini. Text candidates tried: {tried}")

    fallback = fallback_recommendation(query, products)
    return RecommendationResponse(
        recommended_ids=fallback["recommended_ids"],
        reason=FALLBACK_REASON,
        sources=_snippets_as_sources(snippets),
        debug={"gemini_candidates_tried": tried},
    )
