"""Elasticsearch engine — Index, delete and search searchable rows in Elasticsearch (v8+).

Uses the synchronous ``elasticsearch`` client. Each row is written or
removed with its own request; client errors propagate to the caller
unchanged, so a failure mid-batch leaves earlier rows written and later
rows unattempted.

Searches match ``*query*`` wildcards against the fields configured for the
index (``elasticsearch.fields.<index>``), combined with OR semantics. The
fields should be ``keyword`` (not analyzed) for partial matching to behave;
see https://www.elastic.co/guide/en/elasticsearch/guide/current/partial-matching.html
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from elastiscout.config.settings import ElasticsearchSettings
from elastiscout.engines.base.contracts import SupportsSoftDelete
from elastiscout.engines.base.engine import SearchEngine
from elastiscout.models.query import SearchOptions

if TYPE_CHECKING:
    from elasticsearch import Elasticsearch

    from elastiscout.engines.base.contracts import Searchable
    from elastiscout.models.query import SearchQuery

logger = logging.getLogger(__name__)

SOFT_DELETED_FIELD = "__soft_deleted"


class ElasticsearchEngine(SearchEngine):
    """Search engine backed by an Elasticsearch cluster.

    Args:
        client: A configured ``elasticsearch.Elasticsearch`` client.
        settings: Per-index bodies, searchable fields and feature flags.
            Read on every call, so changes take effect immediately.
    """

    def __init__(self, client: Elasticsearch, settings: ElasticsearchSettings | None = None) -> None:
        self._client = client
        self._settings = settings or ElasticsearchSettings()

    @property
    def client(self) -> Elasticsearch:
        return self._client

    # ── Indices ──────────────────────────────────────────────────────────

    def init_index(self, index: str) -> None:
        """Create ``index`` with its configured body unless it already exists."""
        if self._client.indices.exists(index=index):
            return
        body = self._settings.indices.get(index, {})
        self._client.indices.create(index=index, **body)
        logger.info("Created index %s", index)

    # ── Writes ───────────────────────────────────────────────────────────

    def update(self, models: Sequence[Searchable]) -> None:
        """Index every row under its primary key."""
        if not models:
            return

        index = models[0].searchable_as()
        self.init_index(index)

        for model in models:
            document = dict(model.to_searchable_dict())
            if self._settings.soft_delete and self.uses_soft_delete(model):
                document[SOFT_DELETED_FIELD] = 1 if model.is_trashed() else 0
            self._client.index(index=index, id=model.get_key(), document=document)
        logger.debug("Indexed %d documents into %s", len(models), index)

    def delete(self, models: Sequence[Searchable]) -> None:
        """Delete every row's document; missing documents raise ``NotFoundError``."""
        if not models:
            return

        index = models[0].searchable_as()
        self.init_index(index)

        for model in models:
            self._client.delete(index=index, id=model.get_key())
        logger.debug("Deleted %d documents from %s", len(models), index)

    # ── Search ───────────────────────────────────────────────────────────

    def search(self, builder: SearchQuery) -> Any:
        return self.perform_search(
            builder,
            SearchOptions(
                numeric_filters=self.filters(builder),
                hits_per_page=builder.limit,
            ),
        )

    def paginate(self, builder: SearchQuery, per_page: int, page: int) -> Any:
        return self.perform_search(
            builder,
            SearchOptions(
                numeric_filters=self.filters(builder),
                hits_per_page=per_page,
                page=page - 1,
            ),
        )

    def perform_search(self, builder: SearchQuery, options: SearchOptions | None = None) -> Any:
        """Run ``builder`` against its row type's index.

        A ``builder.callback`` replaces the default query entirely and is
        called as ``callback(client, query, options)``.
        """
        options = options or SearchOptions()
        index = builder.model.searchable_as()
        self.init_index(index)

        if builder.callback is not None:
            return builder.callback(self._client, builder.query, options)

        fields = self._settings.fields.get(index, [])
        params: dict[str, Any] = {"query": self._build_query(builder, fields)}
        if options.hits_per_page is not None:
            params["size"] = options.hits_per_page
        if options.offset is not None:
            params["from_"] = options.offset

        logger.debug("Searching %s for %r over %s", index, builder.query, fields)
        return self._client.search(index=index, **params)

    def filters(self, builder: SearchQuery) -> list[str]:
        """Flatten the builder's equality filters to ``field=value`` strings."""
        return [f"{field}={value}" for field, value in builder.wheres]

    def _build_query(self, builder: SearchQuery, fields: list[str]) -> dict[str, Any]:
        should = [{"wildcard": {field: f"*{builder.query}*"}} for field in fields]
        query: dict[str, Any] = {"bool": {"should": should}}

        # Equality filters only narrow the hits when explicitly enabled
        if self._settings.apply_filters and builder.wheres:
            query["bool"]["filter"] = [{"term": {field: value}} for field, value in builder.wheres]
            if should:
                query["bool"]["minimum_should_match"] = 1
        return query

    # ── Results ──────────────────────────────────────────────────────────

    def map_ids(self, results: Any) -> list[Any]:
        return [hit["_id"] for hit in results["hits"]["hits"]]

    def map(self, builder: SearchQuery, results: Any, model: type[Searchable]) -> list[Searchable]:
        if self.get_total_count(results) == 0:
            return []

        ids = self.map_ids(results)
        rows = {str(row.get_key()): row for row in model.find_many(ids)}
        return [rows[str(key)] for key in ids if str(key) in rows]

    def get_total_count(self, results: Any) -> int:
        total = results["hits"]["total"]
        # Elasticsearch 7+ reports {"value": n, "relation": "eq"}
        if isinstance(total, dict):
            return int(total["value"])
        return int(total)

    def flush(self, model: type[Searchable]) -> None:
        index = model.searchable_as()
        self._client.indices.delete(index=index, ignore_unavailable=True)
        logger.info("Flushed index %s", index)

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def uses_soft_delete(model: Any) -> bool:
        """Whether a row (or row type) supports logical deletion."""
        if isinstance(model, type):
            return issubclass(model, SupportsSoftDelete)
        return isinstance(model, SupportsSoftDelete)
