"""Date and datetime parsing for filter values (UTC).

Values are parsed in strict mode: a day, month and year must all be present, so partial inputs
such as "March" are rejected rather than silently completed with today's date.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from functools import lru_cache

import dateparser
from dateparser.conf import Settings as DateparserSettings

DATE_ORDERS: frozenset[str] = frozenset({"YMD", "DMY", "MDY"})

_LANGUAGES = ["en"]


@lru_cache(maxsize=len(DATE_ORDERS))
def _dateparser_settings(date_order: str) -> DateparserSettings:
    return DateparserSettings().replace(
        STRICT_PARSING=True,
        DATE_ORDER=date_order,
        # Otherwise the "en" locale order overrides DATE_ORDER.
        PREFER_LOCALE_DATE_ORDER=False,
        TIMEZONE="UTC",
        TO_TIMEZONE="UTC",
        RETURN_AS_TIMEZONE_AWARE=True,
    )


def parse_datetime(text: str, *, date_order: str = "YMD") -> datetime | None:
    """Parse a date or datetime string into an aware UTC `datetime`.

    Returns:
        The parsed value, or `None` if the text is not a complete date.
    """

    value = (text or "").strip()
    if not value:
        return None

    dt = dateparser.parse(
        value,
        languages=_LANGUAGES,
        settings=_dateparser_settings(date_order),
    )
    if not dt:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_date(text: str, *, date_order: str = "YMD") -> date | None:
    """Parse a calendar day (UTC). Any time-of-day component is discarded."""

    dt = parse_datetime(text, date_order=date_order)
    if dt is None:
        return None
    return dt.date()
