"""Query parameter parser orchestration.

Pipeline:
    1) Decompose raw keys into `(field, operator, raw_value)`.
    2) Split sort params from filter params.
    3) Cast filter params against the schema; any error fails the parse and sort is skipped.
    4) Resolve sort params merged with schema defaults; any error fails the parse.
    5) Return the filters plus the resolved sort order.

Request data never raises: every outcome is a `ParseResult`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from querie.params.caster import Caster, DefaultCaster
from querie.params.context import ParseContext, ParseResult
from querie.params.fields import cast_params, collect_data, collect_errors
from querie.params.keys import DecomposedParam, decompose
from querie.params.operators import Operator
from querie.params.schema import Schema
from querie.params.sort import resolve_sort

logger = logging.getLogger(__name__)

DEFAULT_MAX_REF_DEPTH = 8


@dataclass(frozen=True)
class QueryParser:
    """A configured parser: which caster to use and how deep `ref` params may nest."""

    caster: Caster = field(default_factory=DefaultCaster)
    max_ref_depth: int = DEFAULT_MAX_REF_DEPTH

    def parse(self, schema: Schema, raw_params: Mapping[str, Any]) -> ParseResult:
        """Parse a raw parameter mapping against the schema."""

        return self.parse_params(schema, decompose(raw_params))

    def parse_params(
            self,
            schema: Schema,
            params: Iterable[DecomposedParam],
            *,
            depth: int = 0,
    ) -> ParseResult:
        """Parse already-decomposed params (used directly for nested `ref` sub-schemas)."""

        context = _new_context(schema, params, depth=depth)
        self._parse_filter(context)
        self._parse_sort(context)

        result = ParseResult.from_context(context)
        if not result.ok:
            logger.debug("parse failed depth=%d errors=%s", depth, result.error_pairs())
        return result

    def _parse_filter(self, context: ParseContext) -> None:
        parse_nested = None
        if context.depth < self.max_ref_depth:
            parse_nested = partial(self.parse_params, depth=context.depth + 1)

        data = cast_params(
            context.schema,
            context.filter_params,
            caster=self.caster,
            parse_nested=parse_nested,
        )

        errors = collect_errors(data)
        if errors:
            context.fail(errors)
        else:
            context.filter_data = collect_data(data)

    @staticmethod
    def _parse_sort(context: ParseContext) -> None:
        if not context.valid:
            return

        sort_data, errors = resolve_sort(context.schema, context.sort_params)
        if errors:
            context.fail(errors)
        else:
            context.sort_data = sort_data


def _new_context(schema: Schema, params: Iterable[DecomposedParam], *, depth: int) -> ParseContext:
    context = ParseContext(schema=schema, depth=depth)
    for param in params:
        if param.operator == Operator.sort:
            context.sort_params.append(param)
        else:
            context.filter_params.append(param)
    return context


_DEFAULT_PARSER = QueryParser()


def parse(schema: Schema, raw_params: Mapping[str, Any], *, caster: Caster | None = None) -> ParseResult:
    """Parse raw query params with the default parser (convenience wrapper).

    Sample schema:
        {
            "inserted_at": "date",
            "count": ("range", "integer"),
            "is_active": "boolean",
            "name": {"type": "string", "sort_default": "asc", "sort_priority": 1},
        }
    """

    parser = _DEFAULT_PARSER if caster is None else QueryParser(caster=caster)
    return parser.parse(schema, raw_params)
