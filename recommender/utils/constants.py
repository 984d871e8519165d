"""
Constants shared by the recommendation pipeline.
"""

# Search results kept as prompt snippets
SEARCH_RESULT_LIMIT = 5

# Title of the synthetic snippet substituted for a failed web search
SEARCH_ERROR_TITLE = "search-error"

# Product ids returned by the fallback heuristic
FALLBACK_LIMIT = 3

FALLBACK_REASON = "Fallback heuristic (model did not return machine-readable JSON)."

# Text fragments echoed back in the fallback debug payload
DEBUG_CANDIDATE_LIMIT = 3

# Gemini generation parameters
MODEL_TEMPERATURE = 0.2
MODEL_MAX_OUTPUT_TOKENS = 800

# Bounds for the quadratic brace scan in extraction.extract_json_from_text
MAX_BRUTE_FORCE_SPAN = 8192
MAX_BRUTE_FORCE_ATTEMPTS = 20000
