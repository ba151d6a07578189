"""Tests for schema declaration normalization and lookup helpers."""

from __future__ import annotations

import pytest

from querie.params.operators import SortDirection
from querie.params.schema import SchemaError, fields, get_field, range_of

SCHEMA = {
    "age": "integer",
    "score": ("range", "integer"),
    "name": {"type": "string", "sort_default": "asc", "sort_priority": 1, "separator": "+"},
    "department": {
        "type": "ref",
        "model": "Department",
        "schema": {"name": "string"},
        "join": "inner",
    },
}


def test_bare_type_tag() -> None:
    declaration = get_field(SCHEMA, "age")
    assert declaration is not None
    assert declaration.type == "integer"
    assert declaration.options() == {"type": "integer"}


def test_tuple_range_is_normalized() -> None:
    declaration = get_field(SCHEMA, "score")
    assert declaration is not None
    assert declaration.type == "range of integer"


def test_range_of_is_idempotent() -> None:
    assert range_of("integer") == "range of integer"
    assert range_of("range of integer") == "range of integer"


def test_option_set_declaration() -> None:
    declaration = get_field(SCHEMA, "name")
    assert declaration is not None
    assert declaration.sort_default == SortDirection.asc
    assert declaration.sort_priority == 1
    assert declaration.separator == "+"
    assert not declaration.is_reference


def test_reference_declaration_keeps_extra_options_and_drops_schema() -> None:
    declaration = get_field(SCHEMA, "department")
    assert declaration is not None
    assert declaration.is_reference
    assert declaration.nested_schema == {"name": "string"}
    assert declaration.options() == {"type": "ref", "model": "Department", "join": "inner"}


def test_unknown_field_is_absent() -> None:
    assert get_field(SCHEMA, "salary") is None


def test_fields() -> None:
    assert fields(SCHEMA) == {"age", "score", "name", "department"}


@pytest.mark.parametrize(
    "declaration",
    [
        {"type": "string", "sort_default": "sideways"},
        {"type": "string", "separator": ""},
        {"sort_default": "asc"},
        ("range", "integer", "extra"),
        ("between", "integer"),
        42,
    ],
)
def test_malformed_declarations_raise(declaration: object) -> None:
    with pytest.raises(SchemaError):
        get_field({"field": declaration}, "field")
