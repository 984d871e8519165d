"""
Deterministic catalog-only recommendation, used when Gemini output cannot be parsed.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

from recommender.schemas.products import Product
from recommender.utils.constants import FALLBACK_LIMIT

_PRICE_CEILING_RE = re.compile(r"(under|below|<)\s*\$?(\d{1,6})")


def extract_max_price(query: str) -> Optional[int]:
    """Read a price ceiling such as 'under $500' or '< 300' from the query."""
    match = _PRICE_CEILING_RE.search(query.lower())
    return int(match.group(2)) if match else None


def _score(product: Product, tokens: List[str]) -> int:
    name = product.name.lower()
    features = " ".join(product.features).lower()
    # category is matched as stored
    return sum(1 for t in tokens if t in name or t in product.category or t in features)


def fallback_recommendation(query: str, products: Sequence[Product]) -> Dict[str, Any]:
    """
    Rank catalog products by token overlap with the query.

    Products above a price ceiling found in the query are dropped first.
    Ties keep catalog order.

    Returns:
        Dict with recommended_ids (top 3), an empty reason and empty sources;
        the orchestrator fills in reason and sources.
    """
    lower = query.lower()
    max_price = extract_max_price(lower)

    candidates = list(products)
    if max_price is not None:
        candidates = [p for p in candidates if p.price <= max_price]

    tokens = [t for t in lower.split() if t]
    ranked = sorted(candidates, key=lambda p: _score(p, tokens), reverse=True)

    return {
        "recommended_ids": [p.id for p in ranked[:FALLBACK_LIMIT]],
        "reason": "",
        "sources": [],
    }
