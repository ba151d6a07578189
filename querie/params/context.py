"""Parse accumulator and result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from querie.params.keys import DecomposedParam
from querie.params.operators import KEY_SEPARATOR, SORT_KEY, ErrorMessage, Operator, SortDirection
from querie.params.schema import Schema

SortPair = tuple[str, SortDirection | None]


class QueryParamsError(ValueError):
    """Raised by `ParseResult.unwrap()` when the parse failed."""

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        self.errors = errors
        details = ", ".join(f"{e.field} {e.message}" for e in errors)
        super().__init__(f"invalid query parameters: {details}")


@dataclass(frozen=True)
class FieldError:
    """A single field-level failure."""

    field: str
    message: ErrorMessage

    def as_tuple(self) -> tuple[str, str]:
        return self.field, self.message.value


@dataclass(frozen=True)
class RefValue:
    """The casted value of a `ref` filter: a sub-filter scoped to a related model."""

    model: Any
    filters: tuple[CastedFilter, ...]
    sort: tuple[SortPair, ...]
    options: dict[str, Any]

    def as_tuple(self) -> tuple[Any, list[tuple[str, Any]], dict[str, Any]]:
        nested = [f.as_tuple() for f in self.filters]
        nested.append((SORT_KEY, list(self.sort)))
        return self.model, nested, self.options


@dataclass(frozen=True)
class CastedFilter:
    """A validated filter: field, operator and typed value."""

    field: str
    operator: Operator
    value: Any

    @property
    def key(self) -> str:
        """The canonical parameter key that decomposes back to this field and operator."""

        return f"{self.field}{KEY_SEPARATOR}{self.operator.value}"

    def as_tuple(self) -> tuple[str, tuple[str, Any]]:
        value = self.value.as_tuple() if isinstance(self.value, RefValue) else self.value
        return self.operator.value, (self.field, value)


@dataclass
class ParseContext:
    """Mutable state threaded through one parse invocation.

    Each invocation (including every nested `ref` parse) owns a fresh context.
    """

    schema: Schema
    filter_params: list[DecomposedParam] = field(default_factory=list)
    sort_params: list[DecomposedParam] = field(default_factory=list)
    filter_data: list[CastedFilter] = field(default_factory=list)
    sort_data: list[SortPair] = field(default_factory=list)
    errors: list[FieldError] = field(default_factory=list)
    valid: bool = True
    depth: int = 0

    def fail(self, errors: list[FieldError]) -> None:
        self.valid = False
        self.errors = errors


@dataclass(frozen=True)
class ParseResult:
    """Terminal parse outcome: either total success or total failure."""

    ok: bool
    filters: tuple[CastedFilter, ...] = ()
    sort: tuple[SortPair, ...] = ()
    errors: tuple[FieldError, ...] = ()

    @classmethod
    def from_context(cls, context: ParseContext) -> ParseResult:
        if not context.valid:
            return cls(ok=False, errors=tuple(context.errors))
        return cls(ok=True, filters=tuple(context.filter_data), sort=tuple(context.sort_data))

    def entries(self) -> list[tuple[str, Any]]:
        """Success output: filter tuples followed by one trailing sort entry."""

        entries: list[tuple[str, Any]] = [f.as_tuple() for f in self.filters]
        entries.append((SORT_KEY, list(self.sort)))
        return entries

    def error_pairs(self) -> list[tuple[str, str]]:
        return [e.as_tuple() for e in self.errors]

    def unwrap(self) -> list[tuple[str, Any]]:
        """Return `entries()` or raise `QueryParamsError` if the parse failed."""

        if not self.ok:
            raise QueryParamsError(self.errors)
        return self.entries()
