"""
LLM prompt components for the product recommender.

The recommendation flow is a single Gemini call with a fully built prompt,
not a tool-calling agent. See recommender/services/recommendation_service.py.
"""
