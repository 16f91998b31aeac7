"""Engine Manager — Registration and resolution of search engine drivers.

The manager maps driver names to factories and caches the engine each
factory produces. It is an explicit collaborator: whatever composes the
application creates one and hands it to the providers that extend it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from elastiscout.engines.base.engine import SearchEngine
from elastiscout.engines.base.exceptions import EngineNotFoundError

logger = logging.getLogger(__name__)

EngineFactory = Callable[[Any], SearchEngine]


class EngineManager:
    """Registry for search engine factories and resolved engines.

    Example:
        >>> manager = EngineManager(default_driver="elasticsearch")
        >>> manager.extend("elasticsearch", lambda app: ElasticsearchEngine(client))
        >>> engine = manager.engine()
    """

    def __init__(self, default_driver: str | None = None) -> None:
        self.default_driver = default_driver
        self._factories: dict[str, EngineFactory] = {}
        self._engines: dict[str, SearchEngine] = {}

    def extend(self, name: str, factory: EngineFactory) -> None:
        """Register a factory under a driver name.

        Args:
            name: Driver name (e.g. ``"elasticsearch"``).
            factory: Callable taking the application context and returning an engine.
        """
        if name in self._factories:
            logger.warning("Overwriting existing engine registration: %s", name)
            self._engines.pop(name, None)
        self._factories[name] = factory
        logger.info("Registered engine: %s", name)

    def engine(self, name: str | None = None, app: Any = None) -> SearchEngine:
        """Resolve an engine by name, building it on first use.

        Args:
            name: Driver name. Defaults to ``default_driver``.
            app: Application context passed to the factory.

        Returns:
            The engine instance.

        Raises:
            EngineNotFoundError: If no factory is registered under this name.
        """
        name = name or self.default_driver
        if name is None:
            raise EngineNotFoundError("No engine name given and no default driver configured.")

        if name not in self._engines:
            if name not in self._factories:
                raise EngineNotFoundError(
                    f"No engine registered with name '{name}'. "
                    f"Available engines: {list(self._factories.keys())}"
                )
            self._engines[name] = self._factories[name](app)
            logger.debug("Resolved engine: %s", name)
        return self._engines[name]

    def forget_engines(self) -> None:
        """Drop every resolved engine; factories stay registered."""
        self._engines.clear()

    @property
    def registered_engines(self) -> list[str]:
        """List all registered driver names."""
        return list(self._factories.keys())

    @property
    def resolved_engines(self) -> list[str]:
        """List all driver names resolved so far."""
        return list(self._engines.keys())
