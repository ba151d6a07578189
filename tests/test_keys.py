"""Tests for parameter key decomposition."""

from __future__ import annotations

import pytest

from querie.params.context import CastedFilter
from querie.params.keys import DecomposedParam, decompose, decompose_key
from querie.params.operators import Operator


def test_plain_key_uses_is_operator() -> None:
    assert decompose({"name": "dzung"}) == (
        DecomposedParam(field="name", operator=Operator.is_, raw_value="dzung"),
    )


@pytest.mark.parametrize("op", [op for op in Operator if op != Operator.ref])
def test_supported_operators_are_recognized(op: Operator) -> None:
    (param,) = decompose({f"age__{op.value}": "20"})
    assert param.field == "age"
    assert param.operator == op
    assert param.raw_value == "20"


def test_ref_value_is_decomposed_recursively() -> None:
    (param,) = decompose({"department__ref": {"name__contains": "fin", "type": "office"}})
    assert param.operator == Operator.ref
    assert param.raw_value == (
        DecomposedParam(field="name", operator=Operator.contains, raw_value="fin"),
        DecomposedParam(field="type", operator=Operator.is_, raw_value="office"),
    )


def test_ref_with_scalar_value_is_kept_for_later_validation() -> None:
    (param,) = decompose({"department__ref": "office"})
    assert param.operator == Operator.ref
    assert param.raw_value == "office"


def test_unsupported_keys_are_dropped_silently() -> None:
    params = decompose({"age__between": "1,2", "age__approx": "20", "a__b__c": "x", "page": "2"})
    assert [(p.field, p.operator) for p in params] == [
        ("age", Operator.between),
        ("page", Operator.is_),
    ]


def test_operator_matching_is_case_sensitive() -> None:
    assert decompose_key("age__GT") is None


def test_input_order_is_preserved() -> None:
    params = decompose({"c": "1", "a__gt": "2", "b__sort": "asc"})
    assert [p.field for p in params] == ["c", "a", "b"]


@pytest.mark.parametrize("op", list(Operator))
def test_canonical_key_round_trips(op: Operator) -> None:
    casted = CastedFilter(field="age", operator=op, value=20)
    assert decompose_key(casted.key) == ("age", op)
