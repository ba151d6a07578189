"""Sort directive resolution.

User-supplied sort params (`field__sort=asc|desc`) are validated, then merged with the sort defaults
declared in the schema (`sort_default` / `sort_priority` options):

    - a schema priority overrides the position of a user directive on the same field,
      while the user keeps control of the direction;
    - user directives win over defaults for the same field;
    - the final order is ascending by priority, directives without a priority last, in
      encounter order.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, replace

from querie.params.context import FieldError, SortPair
from querie.params.keys import DecomposedParam
from querie.params.operators import ErrorMessage, SortDirection
from querie.params.schema import FieldDeclaration, Schema, declaration_from_obj, fields

# Directives without a declared priority sort after every prioritized one.
UNPRIORITIZED = sys.maxsize

_DIRECTIONS: frozenset[str] = frozenset(d.value for d in SortDirection)


@dataclass(frozen=True)
class SortDirective:
    """A sort field with its direction and optional priority (lower sorts first)."""

    field: str
    direction: SortDirection | None
    priority: int | None = None

    @property
    def order_key(self) -> int:
        return UNPRIORITIZED if self.priority is None else self.priority


def _validate(schema: Schema, param: DecomposedParam) -> SortDirective | FieldError:
    if param.field not in fields(schema):
        return FieldError(field=param.field, message=ErrorMessage.not_sortable)

    direction = param.raw_value
    if not isinstance(direction, str) or direction not in _DIRECTIONS:
        return FieldError(field=param.field, message=ErrorMessage.invalid_sort_direction)

    return SortDirective(field=param.field, direction=SortDirection(direction))


def sort_defaults(schema: Schema) -> list[SortDirective]:
    """Return the sort directives declared by the schema, in declaration order.

    Only option-set declarations can carry `sort_default` / `sort_priority`; fields with neither
    option contribute nothing.
    """

    defaults: list[SortDirective] = []
    for field, obj in schema.items():
        if isinstance(obj, (str, tuple, list)):
            continue

        declaration: FieldDeclaration = declaration_from_obj(field, obj)
        if declaration.sort_default is None and declaration.sort_priority is None:
            continue

        defaults.append(
            SortDirective(
                field=field,
                direction=declaration.sort_default,
                priority=declaration.sort_priority,
            )
        )
    return defaults


def merge_sort(user_defined: Iterable[SortDirective], defaults: Iterable[SortDirective]) -> list[SortPair]:
    """Merge user and schema directives into ordered `(field, direction)` pairs.

    The direction is `None` only for a schema field declaring `sort_priority` without
    `sort_default` that the user did not sort on; the consumer picks its own direction.
    """

    default_list = list(defaults)
    default_by_field = {d.field: d for d in default_list}

    prioritized = [
        replace(d, priority=default_by_field[d.field].priority) if d.field in default_by_field else d
        for d in user_defined
    ]

    seen: set[str] = set()
    unique: list[SortDirective] = []
    for directive in [*prioritized, *default_list]:
        if directive.field in seen:
            continue
        seen.add(directive.field)
        unique.append(directive)

    # A priority-only default with no user directive keeps its slot with a `None` direction.
    return [(d.field, d.direction) for d in sorted(unique, key=lambda d: d.order_key)]


def resolve_sort(
        schema: Schema,
        sort_params: Iterable[DecomposedParam],
) -> tuple[list[SortPair], list[FieldError]]:
    """Validate sort params and merge them with schema defaults.

    Returns:
        `(sort_pairs, [])` on success, or `([], errors)` with every invalid sort param.
    """

    validated = [_validate(schema, p) for p in sort_params]
    errors = [v for v in validated if isinstance(v, FieldError)]
    if errors:
        return [], errors

    user_defined = [v for v in validated if isinstance(v, SortDirective)]
    return merge_sort(user_defined, sort_defaults(schema)), []
