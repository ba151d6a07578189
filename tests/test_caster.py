"""Tests for the default value caster (scalars, ranges, dates)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from querie.params.caster import CastError, DefaultCaster

CASTER = DefaultCaster()


def test_cast_scalars() -> None:
    assert CASTER.cast("integer", "20", {}) == 20
    assert CASTER.cast("float", "2.5", {}) == 2.5
    assert CASTER.cast("decimal", "10.10", {}) == Decimal("10.10")
    assert CASTER.cast("string", "dzung", {}) == "dzung"
    assert CASTER.cast("boolean", "true", {}) is True
    assert CASTER.cast("boolean", "0", {}) is False


def test_cast_invalid_integer() -> None:
    with pytest.raises(CastError):
        CASTER.cast("integer", "twenty", {})


def test_string_rejects_non_string_values() -> None:
    with pytest.raises(CastError):
        CASTER.cast("string", 123, {})


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(CastError):
        CASTER.cast("ref", "x", {})


def test_list_value_is_cast_element_wise() -> None:
    assert CASTER.cast("integer", ["1", "2", 3], {}) == [1, 2, 3]


def test_range_with_default_separator() -> None:
    assert CASTER.cast("range of integer", "18,45", {}) == [18, 45]


def test_range_with_declared_separator() -> None:
    assert CASTER.cast("range of integer", "18+45", {"separator": "+"}) == [18, 45]


def test_range_with_configured_default_separator() -> None:
    caster = DefaultCaster(range_separator=";")
    assert caster.cast("range of integer", "18;45", {}) == [18, 45]


def test_range_by_list_and_mapping() -> None:
    assert CASTER.cast("range of integer", [18, "45"], {}) == [18, 45]
    assert CASTER.cast("range of integer", {"min": "18", "max": 45}, {}) == [18, 45]


@pytest.mark.parametrize("raw", ["18", "1,2,3", "18,x", {"min": 1}, 18])
def test_invalid_ranges(raw: object) -> None:
    with pytest.raises(CastError):
        CASTER.cast("range of integer", raw, {})


def test_cast_date() -> None:
    assert CASTER.cast("date", "2020-10-10", {}) == date(2020, 10, 10)


def test_cast_date_range() -> None:
    assert CASTER.cast("range of date", "2020-10-10,2020-10-20", {}) == [
        date(2020, 10, 10),
        date(2020, 10, 20),
    ]


def test_date_instances_pass_through() -> None:
    assert CASTER.cast("date", date(2020, 1, 2), {}) == date(2020, 1, 2)


def test_invalid_date() -> None:
    with pytest.raises(CastError):
        CASTER.cast("date", "xyz", {})
    with pytest.raises(CastError):
        CASTER.cast("date", 20201010, {})


def test_configured_date_order_decides_ambiguous_dates() -> None:
    assert DefaultCaster(date_order="DMY").cast("date", "05/11/2025", {}) == date(2025, 11, 5)
    assert DefaultCaster(date_order="MDY").cast("date", "05/11/2025", {}) == date(2025, 5, 11)
