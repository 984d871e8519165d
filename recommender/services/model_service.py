"""
Model Service - Gemini text generation

Sends a single-turn prompt to Gemini through the Google Gen AI SDK and
returns the raw response as a plain dict. The response is not interpreted
here; extraction.collect_text_candidates destructures it.

Unlike web search, every failure here is fatal for the request and is raised
as an LLMError subclass. No retries are performed.
"""

import asyncio
import logging
from typing import Any, Dict

import httpx
from google import genai
from google.genai import errors, types

from recommender.config import settings
from recommender.utils.constants import MODEL_MAX_OUTPUT_TOKENS, MODEL_TEMPERATURE

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


class LLMError(Exception):
    """Base exception for Gemini call failures"""
    pass


class ModelNotConfiguredError(LLMError):
    """Raised when GEMINI_API_KEY is missing"""
    pass


class ModelTimeoutError(LLMError):
    """Raised when Gemini does not answer within MODEL_TIMEOUT_SECONDS"""
    pass


class ModelAPIError(LLMError):
    """Raised when the Gemini API rejects or fails the request"""
    pass


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Returns None when GEMINI_API_KEY is not configured.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GEMINI_API_KEY:
        logger.warning(
            "GEMINI_API_KEY not configured. Recommendation requests will fail. "
            "Please set GEMINI_API_KEY in your .env file."
        )
        return None

    _gemini_client = genai.Client(api_key=settings.GEMINI_API_KEY)
    logger.info("Gemini client initialized successfully for recommendations")
    return _gemini_client


def _response_to_dict(response: Any) -> Dict[str, Any]:
    """Convert an SDK response into plain JSON-compatible data."""
    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump(mode="json", exclude_none=True)
    return {"text": str(response)}


async def generate_content(prompt: str) -> Dict[str, Any]:
    """
    Ask Gemini to complete a single user-role prompt.

    Args:
        prompt: Complete prompt text

    Returns:
        The raw Gemini response as a dict

    Raises:
        ModelNotConfiguredError: GEMINI_API_KEY is not set
        ModelTimeoutError: no answer within MODEL_TIMEOUT_SECONDS
        ModelAPIError: the API returned an error
    """
    client = _get_gemini_client()
    if client is None:
        raise ModelNotConfiguredError("GEMINI_API_KEY not set in server environment.")

    config = types.GenerateContentConfig(
        temperature=MODEL_TEMPERATURE,
        max_output_tokens=MODEL_MAX_OUTPUT_TOKENS,
        thinking_config=types.ThinkingConfig(
            thinking_budget=settings.GEMINI_THINKING_BUDGET,
        ),
    )
    contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]

    logger.info(f"Calling Gemini model={settings.GEMINI_MODEL}")

    try:
        response = await asyncio.wait_for(
            client.aio.models.generate_content(
                model=settings.GEMINI_MODEL,
                contents=contents,
                config=config,
            ),
            timeout=settings.MODEL_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        raise ModelTimeoutError(
            f"Gemini call failed: timeout after {settings.MODEL_TIMEOUT_SECONDS} seconds"
        ) from e
    except (errors.APIError, httpx.HTTPError) as e:
        raise ModelAPIError(f"Gemini call failed: {e}") from e

    data = _response_to_dict(response)
    logger.debug(f"Raw Gemini response: {str(data)[:2000]}")
    return data
