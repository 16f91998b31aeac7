"""Elasticsearch provider — Builds the client and registers the engine at boot."""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from elastiscout.config.settings import ElasticsearchSettings, Settings
from elastiscout.engines.base.registry import EngineManager
from elastiscout.engines.elasticsearch.engine import ElasticsearchEngine

logger = logging.getLogger(__name__)

DRIVER_NAME = "elasticsearch"


def build_client(settings: ElasticsearchSettings) -> Elasticsearch:
    """Create an ``Elasticsearch`` client bound to the configured hosts.

    Invalid host lists raise from the client constructor unchanged.
    """
    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
    }
    if settings.username and settings.password:
        client_kwargs["basic_auth"] = (settings.username, settings.password)
    if settings.api_key:
        client_kwargs["api_key"] = settings.api_key
    if settings.request_timeout is not None:
        client_kwargs["request_timeout"] = settings.request_timeout

    return Elasticsearch(**client_kwargs)


class ElasticsearchProvider:
    """Registers the Elasticsearch engine with an ``EngineManager``.

    Call ``boot()`` once at application start. Booting again registers a
    second engine that replaces the first.

    Args:
        settings: Application settings.
        manager: The engine registry to extend.
    """

    def __init__(self, settings: Settings, manager: EngineManager) -> None:
        self.settings = settings
        self.manager = manager

    def boot(self) -> ElasticsearchEngine:
        """Build the client and engine, then register the engine factory."""
        client = build_client(self.settings.elasticsearch)
        engine = ElasticsearchEngine(client, self.settings.elasticsearch)

        self.manager.extend(DRIVER_NAME, lambda app: engine)
        logger.info("Elasticsearch engine registered for hosts %s", self.settings.elasticsearch.hosts)
        return engine


def create_manager(settings: Settings | None = None) -> EngineManager:
    """Compose an ``EngineManager`` with the Elasticsearch engine registered.

    Args:
        settings: Application settings. If None, loads from environment.
    """
    settings = settings or Settings()
    manager = EngineManager(default_driver=settings.scout.driver)
    ElasticsearchProvider(settings, manager).boot()
    return manager
