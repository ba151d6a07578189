"""Schema field declarations (Pydantic models) and lookup helpers.

A schema maps a field name to a declaration. Declarations may be written in three shapes:

    {
        "age": "integer",                          # bare type tag
        "score": ("range", "integer"),             # compound range type
        "name": {"type": "string", "sort_default": "asc", "sort_priority": 1},
    }

Declarations are normalized into `FieldDeclaration` on lookup. A malformed declaration is a
programming error and raises `SchemaError`; request parameters never do.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from querie.params.operators import SortDirection

RANGE_PREFIX = "range of "

Schema = Mapping[str, Any]


class SchemaError(ValueError):
    """Raised when a schema declaration cannot be normalized."""


def range_of(type_tag: str) -> str:
    """Return the compound range tag for a scalar type (idempotent for range tags)."""

    if is_range_type(type_tag):
        return type_tag
    return f"{RANGE_PREFIX}{type_tag}"


def is_range_type(type_tag: str) -> bool:
    return type_tag.startswith(RANGE_PREFIX)


def range_item_type(type_tag: str) -> str:
    return type_tag.removeprefix(RANGE_PREFIX)


class FieldDeclaration(BaseModel):
    """A normalized field declaration.

    Unknown options are kept (`extra="allow"`) and forwarded to the caster untouched.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )

    type: str
    model: Any = None
    nested_schema: dict[str, Any] | None = Field(default=None, alias="schema")
    separator: str | None = None
    sort_default: SortDirection | None = None
    sort_priority: int | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        """Accept `("range", inner)` as a spelling of `"range of inner"`."""

        if isinstance(value, (tuple, list)):
            if len(value) != 2 or value[0] != "range" or not isinstance(value[1], str):
                raise ValueError(f"unsupported compound type: {value!r}")
            return range_of(value[1])
        return value

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("separator must not be empty")
        return value

    @property
    def is_reference(self) -> bool:
        return self.nested_schema is not None

    def options(self) -> dict[str, Any]:
        """Declared options without the nested schema (passed to casters and ref results)."""

        return self.model_dump(by_alias=True, exclude={"nested_schema"}, exclude_none=True)


def declaration_from_obj(field: str, obj: Any) -> FieldDeclaration:
    """Normalize any supported declaration shape into a `FieldDeclaration`."""

    if isinstance(obj, FieldDeclaration):
        return obj

    try:
        if isinstance(obj, Mapping):
            return FieldDeclaration.model_validate(dict(obj))
        return FieldDeclaration(type=obj)
    except ValidationError as exc:
        raise SchemaError(f"invalid declaration for field {field!r}: {exc}") from exc


def get_field(schema: Schema, field: str) -> FieldDeclaration | None:
    """Return the declaration for `field`, or `None` if the schema does not declare it."""

    if field not in schema:
        return None
    return declaration_from_obj(field, schema[field])


def fields(schema: Schema) -> frozenset[str]:
    """Return the set of field names the schema declares."""

    return frozenset(schema.keys())
