"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Keyword arguments passed to ``Settings``
  2. Environment variables (ELASTISCOUT_ prefix)
  3. ``.env`` file
  4. YAML config file (if loaded with ``Settings.from_yaml``)
  5. Default values

Sources are merged key by key, so an environment variable for
``elasticsearch.hosts`` keeps the rest of a YAML ``elasticsearch`` block.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class ElasticsearchSettings(BaseModel):
    """Connection and per-index configuration for the Elasticsearch engine."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Elasticsearch node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="Encoded API key")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    request_timeout: float | None = Field(default=None, description="Client request timeout in seconds")
    indices: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Index creation body (settings, mappings, aliases) keyed by index name",
    )
    fields: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Fields matched by wildcard queries, keyed by index name",
    )
    apply_filters: bool = Field(
        default=False,
        description="Fold equality filters into the query as term clauses",
    )
    soft_delete: bool = Field(
        default=False,
        description="Store __soft_deleted metadata for rows supporting logical deletion",
    )

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ScoutSettings(BaseModel):
    """Search abstraction configuration."""

    driver: str = Field(default="elasticsearch", description="Default engine name resolved by the manager")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the ELASTISCOUT_ prefix.
    Nested settings use double underscores: ELASTISCOUT_ELASTICSEARCH__HOSTS='["http://es:9200"]'

    Example:
        ELASTISCOUT_ELASTICSEARCH__HOSTS='["http://localhost:9200"]'
        ELASTISCOUT_SCOUT__DRIVER=elasticsearch
        ELASTISCOUT_OBSERVABILITY__LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="ELASTISCOUT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file=None,
    )

    scout: ScoutSettings = Field(default_factory=ScoutSettings)
    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The YAML file sits below every other source
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        and the ``.env`` file still take precedence, merged key by key.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        class _YamlSettings(cls):  # type: ignore[valid-type,misc]
            model_config = SettingsConfigDict(**{**cls.model_config, "yaml_file": config_path})

        return _YamlSettings()
