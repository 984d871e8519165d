"""
Web-grounded product recommender backend.
"""

__version__ = "0.1.0"
