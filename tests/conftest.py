"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
import structlog

from elastiscout.config.settings import ElasticsearchSettings, Settings
from elastiscout.engines.elasticsearch.engine import ElasticsearchEngine
from elastiscout.observability.logging import HANDLER_NAME
from tests.fakes import Comment, InMemoryElasticsearch, Post


@pytest.fixture(autouse=True)
def _reset_tables() -> None:
    Post.table = {}
    Comment.table = {}


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handlers, level and context installed by setup_logging."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def posts() -> list[Post]:
    rows = [
        Post(id=1, title="Getting started with Elasticsearch", body="Install and run a node."),
        Post(id=2, title="Wildcard queries", body="Partial matching on keyword fields."),
        Post(id=3, title="Scaling clusters", body="Shards and replicas.", status="draft"),
    ]
    Post.table = {row.id: row for row in rows}
    return rows


# ── Settings ──────────────────────────────────────────────────────────────────


@pytest.fixture
def es_settings() -> ElasticsearchSettings:
    return ElasticsearchSettings(
        hosts=["http://localhost:9200"],
        indices={
            "posts": {
                "mappings": {
                    "properties": {
                        "title": {"type": "keyword"},
                        "body": {"type": "keyword"},
                        "status": {"type": "keyword"},
                    }
                }
            }
        },
        fields={"posts": ["title", "body"], "comments": ["text"]},
    )


@pytest.fixture
def settings(es_settings: ElasticsearchSettings) -> Settings:
    """Create a test Settings instance without reading .env."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        elasticsearch=es_settings,
    )


# ── Clients ───────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_client() -> MagicMock:
    """Elasticsearch client double; every index already exists."""
    client = MagicMock()
    client.indices.exists.return_value = True
    client.search.return_value = {"hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
    return client


@pytest.fixture
def engine(mock_client: MagicMock, es_settings: ElasticsearchSettings) -> ElasticsearchEngine:
    return ElasticsearchEngine(mock_client, es_settings)


@pytest.fixture
def fake_client() -> InMemoryElasticsearch:
    return InMemoryElasticsearch()
