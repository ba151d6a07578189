"""Schema-driven casting of filter params.

Each decomposed param is looked up in the schema and either dropped (unknown field, empty value),
cast into a `CastedFilter`, or reported as a `FieldError`. Errors are collected for every field;
the caller decides whether the stage failed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from querie.params.caster import CastError, Caster
from querie.params.context import CastedFilter, FieldError, ParseResult, RefValue
from querie.params.keys import DecomposedParam
from querie.params.operators import RANGE_OPERATORS, ErrorMessage, Operator
from querie.params.schema import FieldDeclaration, Schema, get_field, range_of

logger = logging.getLogger(__name__)

NestedParser = Callable[[Schema, Iterable[DecomposedParam]], ParseResult]


def cast_params(
        schema: Schema,
        params: Iterable[DecomposedParam],
        *,
        caster: Caster,
        parse_nested: NestedParser | None,
) -> list[CastedFilter | FieldError]:
    """Cast filter params against the schema, preserving input order.

    Args:
        parse_nested: Parser for `ref` sub-schemas; `None` means the nesting depth limit is reached
            and every `ref` param is reported invalid.
    """

    results: list[CastedFilter | FieldError] = []
    for param in params:
        declaration = get_field(schema, param.field)
        if declaration is None:
            logger.debug("dropped unknown field=%s", param.field)
            continue

        if param.raw_value == "":
            continue

        try:
            value = _cast_value(param, declaration, caster=caster, parse_nested=parse_nested)
        except CastError as exc:
            logger.debug("invalid field=%s operator=%s reason=%s", param.field, param.operator, exc)
            results.append(FieldError(field=param.field, message=ErrorMessage.invalid))
            continue

        results.append(CastedFilter(field=param.field, operator=param.operator, value=value))
    return results


def _cast_value(
        param: DecomposedParam,
        declaration: FieldDeclaration,
        *,
        caster: Caster,
        parse_nested: NestedParser | None,
) -> Any:
    if param.operator == Operator.ref:
        return _cast_ref(param, declaration, parse_nested=parse_nested)

    if param.operator in RANGE_OPERATORS:
        return caster.cast(range_of(declaration.type), param.raw_value, declaration.options())

    return caster.cast(declaration.type, param.raw_value, declaration.options())


def _cast_ref(
        param: DecomposedParam,
        declaration: FieldDeclaration,
        *,
        parse_nested: NestedParser | None,
) -> RefValue:
    if declaration.nested_schema is None or declaration.model is None:
        raise CastError("reference field requires 'schema' and 'model' options")
    if not isinstance(param.raw_value, tuple):
        raise CastError("reference value must be a mapping")
    if parse_nested is None:
        logger.warning("reference nesting limit reached field=%s", param.field)
        raise CastError("reference nesting limit reached")

    nested = parse_nested(declaration.nested_schema, param.raw_value)
    if not nested.ok:
        # Nested detail is collapsed into the parent field's error.
        raise CastError(f"nested errors: {nested.error_pairs()}")

    return RefValue(
        model=declaration.model,
        filters=nested.filters,
        sort=nested.sort,
        options=declaration.options(),
    )


def collect_errors(results: Iterable[CastedFilter | FieldError]) -> list[FieldError]:
    return [r for r in results if isinstance(r, FieldError)]


def collect_data(results: Iterable[CastedFilter | FieldError]) -> list[CastedFilter]:
    return [r for r in results if isinstance(r, CastedFilter)]
