"""Parameter key decomposition.

Keys take the form `field` or `field__operator`. Keys with an unknown operator or more than one
separator are dropped silently: permissive parsing lets transports pass unrelated parameters
(pagination, tracking ids, ...) through the same mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from querie.params.operators import KEY_SEPARATOR, SUPPORTED_OPERATORS, Operator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecomposedParam:
    """A parameter split into field, operator and raw value.

    For `ref` params, `raw_value` is the tuple of decomposed nested params.
    """

    field: str
    operator: Operator
    raw_value: Any


def decompose_key(key: str) -> tuple[str, Operator] | None:
    """Split a raw key into `(field, operator)`, or return `None` if the key is unsupported."""

    parts = key.split(KEY_SEPARATOR)
    if len(parts) == 1:
        return parts[0], Operator.is_
    if len(parts) == 2 and parts[1] in SUPPORTED_OPERATORS:
        return parts[0], Operator(parts[1])
    return None


def decompose(raw_params: Mapping[str, Any]) -> tuple[DecomposedParam, ...]:
    """Decompose every raw key of a parameter mapping, preserving input order."""

    decomposed: list[DecomposedParam] = []
    for key, value in raw_params.items():
        split = decompose_key(key)
        if split is None:
            logger.debug("dropped unsupported key=%s", key)
            continue

        field, operator = split
        if operator == Operator.ref and isinstance(value, Mapping):
            value = decompose(value)

        decomposed.append(DecomposedParam(field=field, operator=operator, raw_value=value))
    return tuple(decomposed)
