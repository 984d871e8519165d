"""
Recommendation Prompt Templates

Builds the single-turn prompt sent to Gemini. The prompt embeds the user's
query, the catalog and the web snippets as JSON, and asks for exactly one
fenced JSON block so extraction.extract_json_from_text can recover it.

Prompt Engineering Pattern:
- XML tags separate the query, catalog and web context
- Catalog and snippets are serialized as data, not prose
- The output contract is restated with an example block
"""

import json
from typing import Sequence

from recommender.schemas.products import Product
from recommender.schemas.recommendations import SearchSnippet

RECOMMENDATION_PROMPT_TEMPLATE = """You are an assistant that recommends products from a small catalog.

<query>
User request: "{query}"
</query>

<catalog>
{catalog_json}
</catalog>

<web_snippets>
{snippets_json}
</web_snippets>

<instructions>
- Recommend only products whose "id" appears in the catalog.
- Use the web snippets as evidence and cite the ones you relied on.
- Return ONLY a JSON object in a fenced code block with keys:
  "recommended_ids" (array of catalog ids), "reason" (short explanation),
  "sources" (array of {{"title": ..., "link": ...}}).
</instructions>

<output_format>
Respond with a fenced JSON block like:

```json
{{ "recommended_ids": ["p1", "p2"], "reason": "short explanation", "sources": [{{ "title": "...", "link": "..." }}] }}
```

Do not include any other text.
</output_format>
"""


def build_recommendation_prompt(
    query: str,
    products: Sequence[Product],
    snippets: Sequence[SearchSnippet],
) -> str:
    """
    Build the Gemini prompt for one recommendation request.

    Args:
        query: User's free-text preference, embedded verbatim
        products: Catalog to recommend from
        snippets: Web search snippets (possibly a single search-error snippet)

    Returns:
        str: Prompt text ready to be sent to Gemini
    """
    catalog_json = json.dumps([p.model_dump() for p in products], ensure_ascii=False)
    snippets_json = json.dumps([s.model_dump() for s in snippets], ensure_ascii=False)

    return RECOMMENDATION_PROMPT_TEMPLATE.format(
        query=query,
        catalog_json=catalog_json,
        snippets_json=snippets_json,
    )
