"""Elastiscout — Elasticsearch driver for a model search-abstraction layer."""

__version__ = "0.1.0"
