"""Engine-layer exceptions.

Backend client errors are not wrapped; these cover failures of the
engine layer itself.
"""


class EngineError(Exception):
    """Base exception for engine-layer errors."""


class EngineNotFoundError(EngineError):
    """Raised when a requested engine is not registered."""


class ConfigurationError(EngineError):
    """Raised when engine configuration is invalid."""
