"""
Pytest configuration for recommender backend tests.

Sets up test environment and global fixtures.
"""
import os
import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-api-key")
os.environ.setdefault("SERPAPI_KEY", "test-serpapi-key")

from recommender.data.catalog import get_catalog  # noqa: E402
from recommender.services import model_service  # noqa: E402


@pytest.fixture
def catalog():
    """The fixed 6-item catalog (p1..p6)."""
    return list(get_catalog())


@pytest.fixture(autouse=True)
def reset_gemini_client():
    """Never share a lazily-created Gemini client between tests."""
    model_service._gemini_client = None
    yield
    model_service._gemini_client = None


@pytest.fixture
def gemini_response():
    """Build a native Gemini generateContent response carrying one text part."""
    def _build(text: str) -> dict:
        return {
            "candidates": [
                {
                    "content": {"role": "model", "parts": [{"text": text}]},
                    "finish_reason": "STOP",
                }
            ]
        }
    return _build
