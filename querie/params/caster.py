"""Value casting capability.

The parser never converts raw strings itself; it delegates to a `Caster`. `DefaultCaster` is the
implementation used unless the caller plugs in its own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from querie.params import dates
from querie.params.schema import is_range_type, range_item_type

DEFAULT_RANGE_SEPARATOR = ","


class CastError(ValueError):
    """Raised by a caster when a raw value cannot be converted to the declared type."""


class Caster(Protocol):
    """Converts a raw parameter value into a typed value for a declared type tag."""

    def cast(self, type_tag: str, raw_value: Any, options: Mapping[str, Any]) -> Any:
        """Return the typed value or raise `CastError`."""
        ...


_SCALAR_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "integer": TypeAdapter(int),
    "float": TypeAdapter(float),
    "decimal": TypeAdapter(Decimal),
    "string": TypeAdapter(str),
    "boolean": TypeAdapter(bool),
    "uuid": TypeAdapter(UUID),
}

_DATE_TYPES = frozenset({"date", "datetime"})


@dataclass(frozen=True)
class DefaultCaster:
    """Caster for the built-in type tags.

    Supported tags: `integer`, `float`, `decimal`, `string`, `boolean`, `uuid`, `date`, `datetime`
    and `range of <tag>` for any of them.
    """

    range_separator: str = DEFAULT_RANGE_SEPARATOR
    date_order: str = "YMD"

    def cast(self, type_tag: str, raw_value: Any, options: Mapping[str, Any]) -> Any:
        if is_range_type(type_tag):
            return self._cast_range(range_item_type(type_tag), raw_value, options)

        # Multi-valued operators (e.g. `in`) may receive a list from the transport.
        if isinstance(raw_value, (list, tuple)):
            return [self._cast_scalar(type_tag, item) for item in raw_value]

        return self._cast_scalar(type_tag, raw_value)

    def _cast_range(self, item_type: str, raw_value: Any, options: Mapping[str, Any]) -> list[Any]:
        if isinstance(raw_value, Mapping):
            if "min" not in raw_value or "max" not in raw_value:
                raise CastError("range mapping requires 'min' and 'max'")
            parts = [raw_value["min"], raw_value["max"]]
        elif isinstance(raw_value, (list, tuple)):
            parts = list(raw_value)
        elif isinstance(raw_value, str):
            separator = options.get("separator") or self.range_separator
            parts = raw_value.split(separator)
        else:
            raise CastError(f"unsupported range value: {raw_value!r}")

        if len(parts) != 2:
            raise CastError(f"range requires exactly 2 values, got {len(parts)}")

        return [self._cast_scalar(item_type, part) for part in parts]

    def _cast_scalar(self, type_tag: str, raw_value: Any) -> Any:
        if type_tag in _DATE_TYPES:
            return self._cast_date(type_tag, raw_value)

        adapter = _SCALAR_ADAPTERS.get(type_tag)
        if adapter is None:
            raise CastError(f"unsupported type: {type_tag!r}")

        try:
            return adapter.validate_python(raw_value)
        except ValidationError as exc:
            raise CastError(f"cannot cast {raw_value!r} to {type_tag}") from exc

    def _cast_date(self, type_tag: str, raw_value: Any) -> date | datetime:
        if type_tag == "datetime" and isinstance(raw_value, datetime):
            return raw_value
        if type_tag == "date" and isinstance(raw_value, date) and not isinstance(raw_value, datetime):
            return raw_value
        if not isinstance(raw_value, str):
            raise CastError(f"cannot cast {raw_value!r} to {type_tag}")

        if type_tag == "date":
            parsed: date | datetime | None = dates.parse_date(raw_value, date_order=self.date_order)
        else:
            parsed = dates.parse_datetime(raw_value, date_order=self.date_order)

        if parsed is None:
            raise CastError(f"cannot cast {raw_value!r} to {type_tag}")
        return parsed
