"""Base search engine — Abstract interface for all search drivers.

Every backend must implement this interface to serve the model search
abstraction. The engine is responsible for:
  1. Writing rows to, and removing them from, the backend index
  2. Executing plain and paginated searches
  3. Mapping raw results back to ids and to rows
  4. Reporting the total hit count and flushing a row type's index
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from elastiscout.engines.base.contracts import Searchable
    from elastiscout.models.query import SearchQuery


class SearchEngine(ABC):
    """Abstract base class for search engine drivers.

    All engines must implement:
      - update() / delete(): write or remove a batch of rows
      - search() / paginate(): run a query and return the raw backend result
      - map_ids() / map(): turn a raw result into ids or rows
      - get_total_count(): read the total hit count of a raw result
      - flush(): remove everything indexed for a row type

    Engines are synchronous; each call returns once the backend has answered.
    """

    @abstractmethod
    def update(self, models: Sequence[Searchable]) -> None:
        """Index (create or replace) the given rows.

        Args:
            models: Rows of a single searchable type.
        """

    @abstractmethod
    def delete(self, models: Sequence[Searchable]) -> None:
        """Remove the given rows from the index.

        Args:
            models: Rows of a single searchable type.
        """

    @abstractmethod
    def search(self, builder: SearchQuery) -> Any:
        """Execute a search and return the raw backend result."""

    @abstractmethod
    def paginate(self, builder: SearchQuery, per_page: int, page: int) -> Any:
        """Execute a search for one page of results.

        Args:
            builder: The search query.
            per_page: Hits per page.
            page: 1-based page number.

        Returns:
            The raw backend result.
        """

    @abstractmethod
    def map_ids(self, results: Any) -> list[Any]:
        """Return the hit ids of a raw result, in backend order."""

    @abstractmethod
    def map(self, builder: SearchQuery, results: Any, model: type[Searchable]) -> list[Searchable]:
        """Map a raw result to rows loaded from the system of record.

        Args:
            builder: The search query that produced ``results``.
            results: The raw backend result.
            model: Row type used to bulk-load rows by key.

        Returns:
            Rows in hit order; hits without a matching row are skipped.
        """

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        """Return the total hit count reported by the backend."""

    @abstractmethod
    def flush(self, model: type[Searchable]) -> None:
        """Remove every indexed document of a row type."""

    def keys(self, builder: SearchQuery) -> list[Any]:
        """Search and return only the matching ids."""
        return self.map_ids(self.search(builder))

    def get(self, builder: SearchQuery) -> list[Searchable]:
        """Search and return the matching rows in one step."""
        return self.map(builder, self.search(builder), builder.model)
