"""CLI entry point for Elastiscout index maintenance."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from elastiscout.config.settings import Settings


@dataclass(frozen=True)
class IndexRef:
    """Row-type stand-in that only knows its index name."""

    name: str

    def searchable_as(self) -> str:
        return self.name


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="elastiscout",
        description="Elastiscout — Elasticsearch engine for model search",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Elastiscout {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    ensure = commands.add_parser("ensure-index", help="Create an index if it does not exist")
    ensure.add_argument("index", help="Index name")

    search = commands.add_parser("search", help="Run a wildcard search and print the raw response")
    search.add_argument("index", help="Index name")
    search.add_argument("query", help="Free-text query")
    search.add_argument("--per-page", type=int, default=None, help="Hits per page")
    search.add_argument("--page", type=int, default=1, help="1-based page number (requires --per-page)")

    flush = commands.add_parser("flush", help="Delete an index and every document in it")
    flush.add_argument("index", help="Index name")

    args = parser.parse_args(argv)

    if args.command == "search":
        if args.per_page is None and args.page != 1:
            parser.error("--page requires --per-page")
        if args.per_page is not None and args.per_page < 1:
            parser.error("--per-page must be at least 1")
        if args.page < 1:
            parser.error("--page must be at least 1")

    from elastiscout.engines.base.exceptions import ConfigurationError

    try:
        settings = load_settings(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.log_level:
        settings.observability.log_level = args.log_level

    from elastiscout.models.query import SearchQuery
    from elastiscout.observability.logging import setup_logging
    from elastiscout.provider import DRIVER_NAME, create_manager

    setup_logging(settings.observability, driver=DRIVER_NAME, command=args.command, index=args.index)

    engine = create_manager(settings).engine(DRIVER_NAME)
    ref = IndexRef(args.index)

    if args.command == "ensure-index":
        engine.init_index(ref.searchable_as())
    elif args.command == "flush":
        engine.flush(ref)
    elif args.command == "search":
        builder = SearchQuery(model=ref, query=args.query)
        if args.per_page is not None:
            results = engine.paginate(builder, args.per_page, args.page)
        else:
            results = engine.search(builder)
        print(json.dumps(getattr(results, "body", results), indent=2, default=str))


def load_settings(path: str | None) -> Settings:
    """Load settings from ``path`` or the environment.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    import yaml  # type: ignore[import-untyped]
    from pydantic import ValidationError

    from elastiscout.config.settings import Settings
    from elastiscout.engines.base.exceptions import ConfigurationError

    if path is None:
        return Settings()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    try:
        return Settings.from_yaml(config_path)
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


def _get_version() -> str:
    """Get the package version."""
    from elastiscout import __version__

    return __version__


if __name__ == "__main__":
    main()
