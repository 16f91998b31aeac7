"""Request models shared by search engines."""

from elastiscout.models.query import SearchOptions, SearchQuery

__all__ = ["SearchOptions", "SearchQuery"]
