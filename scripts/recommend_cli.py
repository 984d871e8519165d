#!/usr/bin/env python3
"""
Recommendation CLI

Runs the recommendation pipeline locally against the real SerpApi and Gemini
APIs, without starting the HTTP server.

Usage:
    python scripts/recommend_cli.py --query "I want a phone under $500"
    python scripts/recommend_cli.py --suite
    python scripts/recommend_cli.py --query "quiet earbuds" --debug
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from recommender.config import settings
from recommender.data.catalog import get_catalog
from recommender.schemas.recommendations import RecommendationResponse
from recommender.services.model_service import LLMError
from recommender.services.recommendation_service import recommend
from recommender.utils.constants import FALLBACK_REASON


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SUITE_QUERIES = [
    "I want a phone under $500",
    "cheap phone with dual-sim",
    "tablet for work below 450",
    "camera with optical zoom",
    "noise cancelling bluetooth earbuds < 100",
]


def print_result(result: RecommendationResponse):
    """Pretty print the recommendation result."""
    catalog = {p.id: p for p in get_catalog()}

    print("\n" + "=" * 60)
    source = "FALLBACK" if result.reason == FALLBACK_REASON else "GEMINI"
    print(f"SOURCE: {source}")
    print("=" * 60)

    print(f"\nReason: {result.reason}\n")
    for i, product_id in enumerate(result.recommended_ids, 1):
        product = catalog.get(product_id)
        if product is None:
            print(f"  {i}. {product_id} (not in catalog)")
            continue
        print(f"  {i}. {product.name} - ${product.price:g} [{product.category}]")

    if result.sources:
        print("\nSources:")
        for source_item in result.sources:
            print(f"  - {source_item.title or '(untitled)'}: {source_item.link or '-'}")

    if result.debug:
        print("\nDebug:")
        for text in result.debug.get("gemini_candidates_tried", []):
            print(f"  > {text[:200]}")


async def run_query(query: str):
    """Run a single recommendation query."""
    if not settings.GEMINI_API_KEY:
        print("\n⚠️  ERROR: GEMINI_API_KEY environment variable not set!")
        print("   export GEMINI_API_KEY=your-gemini-api-key")
        return None
    if not settings.SERPAPI_KEY:
        print("\n⚠️  SERPAPI_KEY not set: running without web search.")

    print(f"\nQuery: {query}")
    print("Calling SerpApi + Gemini...")

    try:
        result = await recommend(query, list(get_catalog()))
    except LLMError as e:
        print(f"\n❌ Gemini call failed: {e}")
        return None

    print_result(result)
    return result


async def run_suite():
    """Run the predefined queries and report how many fell back."""
    fallbacks = 0
    errors = 0

    for i, query in enumerate(SUITE_QUERIES, 1):
        print(f"\n\n{'#' * 60}")
        print(f"# QUERY {i}/{len(SUITE_QUERIES)}")
        print(f"{'#' * 60}")

        result = await run_query(query)
        if result is None:
            errors += 1
        elif result.reason == FALLBACK_REASON:
            fallbacks += 1

    print("\n" + "=" * 60)
    print(f"Total: {len(SUITE_QUERIES)} | Fallbacks: {fallbacks} | Errors: {errors}")
    print("=" * 60 + "\n")


def main():
    parser = argparse.ArgumentParser(
        description="Run the recommendation pipeline locally",
    )
    parser.add_argument(
        "--query", "-q",
        type=str,
        help="Free-text preference (e.g., 'I want a phone under $500')"
    )
    parser.add_argument(
        "--suite",
        action="store_true",
        help="Run the predefined queries"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.suite:
        asyncio.run(run_suite())
    elif args.query:
        asyncio.run(run_query(args.query))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
