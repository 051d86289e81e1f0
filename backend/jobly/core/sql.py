"""
Parameterized SQL fragment builders.

Both builders return a ``SqlFragment``: a clause string that references its
values only through PostgreSQL positional placeholders (``$1``, ``$2``, ...)
and the list of values in placeholder order. Values are never interpolated
into the clause text.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence

from jobly.core.errors import ValidationError


class SqlFragment(NamedTuple):
    clause: str
    values: List[Any]


class Predicate(str, enum.Enum):
    CONTAINS = "contains"  # case-insensitive substring
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    POSITIVE = "positive"  # flag, no placeholder
    EQUALS = "equals"


@dataclass(frozen=True)
class Criterion:
    """One recognized search key: where it applies and how it compares."""

    key: str
    column: str
    predicate: Predicate


def _quote_identifier(name: str) -> str:
    """Double-quote an identifier, doubling any embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> SqlFragment:
    """
    Build the SET portion of an UPDATE from a sparse payload.

    Keys are external field names; ``js_to_sql`` maps the ones whose column
    name differs. Placeholders follow the payload's insertion order:

        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name"})
        -> SqlFragment('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        ValidationError: ``data`` is empty.
    """
    keys = list(data)
    if not keys:
        raise ValidationError("No data supplied")

    cols = [
        f"{_quote_identifier(js_to_sql.get(key, key))}=${idx}"
        for idx, key in enumerate(keys, start=1)
    ]
    return SqlFragment(", ".join(cols), [data[key] for key in keys])


def _check_ranges(criteria: Mapping[str, Any], table: Sequence[Criterion]) -> None:
    lower: dict[str, Criterion] = {}
    upper: dict[str, Criterion] = {}
    for row in table:
        if criteria.get(row.key) is None:
            continue
        if row.predicate is Predicate.AT_LEAST:
            lower[row.column] = row
        elif row.predicate is Predicate.AT_MOST:
            upper[row.column] = row

    for column, low in lower.items():
        high = upper.get(column)
        if high is not None and criteria[low.key] > criteria[high.key]:
            raise ValidationError(f"{low.key} cannot be greater than {high.key}")


def sql_for_filters(
    criteria: Mapping[str, Any],
    table: Sequence[Criterion],
    values: Optional[Sequence[Any]] = None,
    start_index: Optional[int] = None,
) -> SqlFragment:
    """
    Build a WHERE predicate from search criteria.

    Rows of ``table`` are applied in table order, whatever order ``criteria``
    was built in. A key that is missing or ``None`` adds nothing; ``0`` and
    ``""`` are real values. The returned clause is ``""`` when no predicate
    applies, so the caller can leave out WHERE entirely.

    To combine with predicates the caller already numbered, pass those
    values as ``values``: numbering continues from ``start_index`` (default
    ``len(values) + 1``) and the returned list is the seed followed by the
    new values. The seed itself is not modified.

    Raises:
        ValidationError: a lower bound is greater than its upper bound.
    """
    _check_ranges(criteria, table)

    out: List[Any] = list(values or [])
    next_idx = start_index if start_index is not None else len(out) + 1
    parts: List[str] = []

    for row in table:
        value = criteria.get(row.key)
        if value is None:
            continue

        if row.predicate is Predicate.POSITIVE:
            if value:
                parts.append(f"{row.column} > 0")
            continue

        if row.predicate is Predicate.CONTAINS:
            out.append(f"%{value}%")
            parts.append(f"{row.column} ILIKE ${next_idx}")
        else:
            op = {
                Predicate.AT_LEAST: ">=",
                Predicate.AT_MOST: "<=",
                Predicate.EQUALS: "=",
            }[row.predicate]
            out.append(value)
            parts.append(f"{row.column} {op} ${next_idx}")
        next_idx += 1

    return SqlFragment(" AND ".join(parts), out)
