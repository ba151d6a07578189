"""Logging setup for processes that embed the parser.

The parser only logs diagnostics: dropped keys and unknown fields, cast failure reasons and
depth-guard trips. None of it ever reaches a `ParseResult`.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "querie"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# dateparser logs every candidate it tries at DEBUG.
_QUIET_LOGGERS = ("dateparser", "tzlocal")


def level_from_name(name: str) -> int:
    """Resolve a level name such as `"debug"` to its numeric value.

    Raises:
        ValueError: If `name` is not a standard logging level.
    """

    levels = logging.getLevelNamesMapping()
    normalized = name.strip().upper()
    if normalized not in levels:
        raise ValueError(f"unknown log level: {name!r}")
    return levels[normalized]


def configure_logging(level: str = "INFO", *, parser_level: str | None = None) -> None:
    """Configure process logging.

    Args:
        level: Root level for the process.
        parser_level: Level for the `querie` loggers only, so parse diagnostics (logged at DEBUG)
            can be switched on without raising the level of everything else.
    """

    root_level = level_from_name(level)
    logging.basicConfig(level=root_level, format=LOG_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.NOTSET if parser_level is None else level_from_name(parser_level))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
