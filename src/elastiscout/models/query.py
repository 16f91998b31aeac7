"""Query and search option models."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchOptions(BaseModel):
    """Option bag handed from ``search``/``paginate`` to the query step."""

    numeric_filters: list[str] = Field(default_factory=list, description="Equality filters flattened to 'field=value'")
    hits_per_page: int | None = Field(default=None, ge=1, description="Number of hits per page")
    page: int | None = Field(default=None, ge=0, description="Zero-based page index")

    @property
    def offset(self) -> int | None:
        """Document offset of the first hit on ``page``."""
        if self.page is None or self.hits_per_page is None:
            return None
        return self.page * self.hits_per_page


class SearchQuery(BaseModel):
    """A search request against one searchable row type.

    Built by the calling application; engines only read it.

    Example:
        >>> SearchQuery(model=Post, query="elastic").where("status", "published")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Any = Field(description="Searchable row type the query targets")
    query: str = Field(default="", description="Free-text query")
    wheres: list[tuple[str, Any]] = Field(default_factory=list, description="Ordered (field, value) equality filters")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of hits for a plain search")
    callback: Callable[..., Any] | None = Field(
        default=None,
        description="Custom search callable: callback(client, query, options)",
    )

    def where(self, field: str, value: Any) -> SearchQuery:
        """Add an equality filter and return the query for chaining."""
        self.wheres.append((field, value))
        return self

    def take(self, limit: int) -> SearchQuery:
        """Limit the number of hits returned by a plain search."""
        self.limit = limit
        return self
