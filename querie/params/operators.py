"""Closed vocabularies shared by every parsing stage.

Adding an operator is a single-point change: extend `Operator` and, if it needs special casting,
`RANGE_OPERATORS`.
"""

from __future__ import annotations

from enum import StrEnum

KEY_SEPARATOR = "__"
SORT_KEY = "_sort"


class Operator(StrEnum):
    """Supported comparison operators (the suffix after `__` in a parameter key)."""

    lt = "lt"
    gt = "gt"
    ge = "ge"
    le = "le"
    is_ = "is"
    ne = "ne"
    in_ = "in"
    contains = "contains"
    icontains = "icontains"
    between = "between"
    ibetween = "ibetween"
    sort = "sort"
    has = "has"
    ref = "ref"
    like = "like"
    ilike = "ilike"


class SortDirection(StrEnum):
    """Allowed sort directions. Matching is exact and case-sensitive."""

    asc = "asc"
    desc = "desc"


class ErrorMessage(StrEnum):
    """Messages attached to field errors in a failed parse result."""

    invalid = "is invalid"
    not_sortable = "is not sortable"
    invalid_sort_direction = "sort direction is invalid"


SUPPORTED_OPERATORS: frozenset[str] = frozenset(op.value for op in Operator)

RANGE_OPERATORS: frozenset[Operator] = frozenset({Operator.between, Operator.ibetween})
