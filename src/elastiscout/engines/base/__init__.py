"""Base engine interface — Abstract classes and registry for search drivers."""

from elastiscout.engines.base.contracts import Searchable, SupportsSoftDelete
from elastiscout.engines.base.engine import SearchEngine
from elastiscout.engines.base.registry import EngineManager

__all__ = ["EngineManager", "SearchEngine", "Searchable", "SupportsSoftDelete"]
