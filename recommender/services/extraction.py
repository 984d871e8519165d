"""
Structured-response extraction for Gemini replies.

Gemini is asked for a fenced JSON block, but its output format is not
guaranteed. This module recovers a JSON value from arbitrary text and
collects the text fragments of a raw provider response so extraction has
something to try even when the response shape is unfamiliar.

Extraction strategy (first success wins):
1. Fenced ``` / ```json blocks, in order of appearance
2. The span from the first '{' to the last '}'
3. A bounded scan over every '{' ... '}' pair inside that span
"""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from recommender.utils.constants import (
    MAX_BRUTE_FORCE_ATTEMPTS,
    MAX_BRUTE_FORCE_SPAN,
)

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)

_NOT_PARSED = object()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _strict_parse(candidate: str) -> Any:
    """Parse standard JSON, returning _NOT_PARSED instead of raising."""
    try:
        return json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return _NOT_PARSED


def _scan_brace_pairs(text: str, first_brace: int, last_brace: int) -> Any:
    """
    Try every '{' ... '}' substring inside [first_brace, last_brace].

    Opening braces are taken left to right and closing braces right to left,
    so the widest candidate for each opening brace is tried first.
    """
    if last_brace - first_brace > MAX_BRUTE_FORCE_SPAN:
        logger.debug(
            f"Skipping brace scan: span of {last_brace - first_brace} chars "
            f"exceeds {MAX_BRUTE_FORCE_SPAN}"
        )
        return _NOT_PARSED

    openings = [i for i in range(first_brace, last_brace) if text[i] == "{"]
    closings = [j for j in range(last_brace, first_brace, -1) if text[j] == "}"]

    attempts = 0
    for i in openings:
        for j in closings:
            if j <= i:
                break
            attempts += 1
            if attempts > MAX_BRUTE_FORCE_ATTEMPTS:
                logger.debug(f"Brace scan stopped after {MAX_BRUTE_FORCE_ATTEMPTS} attempts")
                return _NOT_PARSED
            value = _strict_parse(text[i:j + 1])
            if value is not _NOT_PARSED:
                return value

    return _NOT_PARSED


def extract_json_from_text(text: Any) -> Optional[Any]:
    """
    Recover a JSON value from free-form model output.

    Handles fenced ```json blocks, inline JSON surrounded by prose, and JSON
    with leading/trailing junk braces. Never raises.

    Args:
        text: Model output; non-string input yields None

    Returns:
        The first JSON value that parses, or None
    """
    if not text or not isinstance(text, str):
        return None

    for match in _FENCED_BLOCK_RE.finditer(text):
        value = _strict_parse(match.group(1).strip())
        if value is not _NOT_PARSED:
            return value

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace == -1 or last_brace <= first_brace:
        return None

    value = _strict_parse(text[first_brace:last_brace + 1])
    if value is not _NOT_PARSED:
        return value

    value = _scan_brace_pairs(text, first_brace, last_brace)
    if value is not _NOT_PARSED:
        return value

    return None


def is_structured_recommendation(value: Any) -> bool:
    """A parsed value is usable only if it is an object with a recommended_ids list."""
    return isinstance(value, dict) and isinstance(value.get("recommended_ids"), list)


# =============================================================================
# RESPONSE SHAPE MATCHERS
# =============================================================================
# Each matcher pulls text fragments out of one known provider response shape
# and returns [] when the shape does not match.

def _texts_from_parts(parts: Any) -> List[str]:
    texts: List[str] = []
    if not isinstance(parts, list):
        return texts
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            texts.append(part["text"])
        elif isinstance(part, str):
            texts.append(part)
    return texts


def _match_candidates(response: Dict[str, Any]) -> List[str]:
    """Gemini `candidates` shape: content as parts list, {"parts": [...]} or string."""
    candidates = response.get("candidates")
    if not isinstance(candidates, list):
        return []

    texts: List[str] = []
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        if isinstance(content, list):
            texts.extend(_texts_from_parts(content))
        elif isinstance(content, dict):
            texts.extend(_texts_from_parts(content.get("parts")))
        elif isinstance(content, str):
            texts.append(content)
        if candidate.get("display"):
            texts.append(str(candidate["display"]))
        if candidate.get("text"):
            texts.append(str(candidate["text"]))
    return texts


def _match_output(response: Dict[str, Any]) -> List[str]:
    """Older flat `output` shape."""
    outputs = response.get("output")
    if not isinstance(outputs, list):
        return []

    texts: List[str] = []
    for out in outputs:
        if not isinstance(out, dict):
            continue
        content = out.get("content")
        if isinstance(content, list):
            for item in content:
                if isinstance(item, dict) and item.get("text"):
                    texts.append(str(item["text"]))
        if out.get("text"):
            texts.append(str(out["text"]))
    return texts


RESPONSE_SHAPE_MATCHERS: Sequence[Callable[[Dict[str, Any]], List[str]]] = (
    _match_candidates,
    _match_output,
)


def collect_text_candidates(response: Any) -> List[str]:
    """
    Gather every plausible text fragment from a raw provider response.

    The whole response serialized as JSON is always appended last, so the
    result is never empty.
    """
    texts: List[str] = []
    if isinstance(response, dict):
        for matcher in RESPONSE_SHAPE_MATCHERS:
            texts.extend(matcher(response))

    texts.append(json.dumps(response, default=str))
    return texts


def find_structured_recommendation(candidates: Sequence[str]) -> Optional[Dict[str, Any]]:
    """Return the first accepted structured value extracted from the candidates."""
    for idx, text in enumerate(candidates):
        value = extract_json_from_text(text)
        if is_structured_recommendation(value):
            logger.debug(f"Structured recommendation found in text candidate #{idx}")
            return value
    return None
