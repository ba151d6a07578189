"""Parser composition root.

This module wires settings into a configured `QueryParser`.
"""

from __future__ import annotations

from querie.config.logging import configure_logging
from querie.config.settings import Settings, load_settings
from querie.params.caster import DefaultCaster
from querie.params.parser import QueryParser


def create_parser(settings: Settings) -> QueryParser:
    """Create a parser from validated settings."""

    caster = DefaultCaster(range_separator=settings.range_separator, date_order=settings.date_order)
    return QueryParser(caster=caster, max_ref_depth=settings.max_ref_depth)


def create_parser_from_env() -> QueryParser:
    """Load settings, configure process logging and return the configured parser.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    settings = load_settings()
    configure_logging(settings.log_level, parser_level=settings.parser_log_level)
    return create_parser(settings)
