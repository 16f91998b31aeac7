"""Configuration package."""

from elastiscout.config.settings import ElasticsearchSettings, Settings

__all__ = ["ElasticsearchSettings", "Settings"]
