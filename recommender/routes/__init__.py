"""
FastAPI routers for all API endpoints.
"""
