"""Pydantic schemas for API request/response validation."""

from .health import HealthResponse
from .search import SearchResponse, SearchResult

__all__ = [
    "HealthResponse",
    "SearchResponse",
    "SearchResult",
]
