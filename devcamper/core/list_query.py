"""List Query Planning — turns raw query-string parameters into a validated query plan.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Directives (select, sort, page, limit, populate) are never treated as filters
    - Every field name is resolved through the resource's allow-list
    - Sort always ends with `id` ascending, so equal keys never reorder between pages
    - Any invalid parameter raises ValidationFailedError before a query runs
    - Integer values, page and limit stay inside the signed 64-bit SQL range

Design Decisions:
    - Collect every problem, then raise once: the client sees all bad parameters
      in a single 400, same as body validation
    - `field[op]=value` syntax kept for existing clients; ops limited to
      gt, gte, lt, lte, in (absent op means equality)
    - Values coerced to the field's declared type here so the executor never
      compares a string column against an int
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from devcamper.core.domain_types import Comparator, FieldType, SortDirection
from devcamper.core.errors import ValidationFailedError
from devcamper.core.resource_fields import FieldSpec, ResourceFields

RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit", "populate"})
QUERY_COMPARATORS = frozenset({
    Comparator.GT, Comparator.GTE, Comparator.LT, Comparator.LTE, Comparator.IN,
})
RANGE_COMPARATORS = frozenset({
    Comparator.GT, Comparator.GTE, Comparator.LT, Comparator.LTE,
})
DEFAULT_PAGE = 1
# Signed 64-bit bounds of an SQL BIGINT; larger values overflow the driver
MAX_SQL_INTEGER = 2**63 - 1
MIN_SQL_INTEGER = -(2**63)

_FILTER_KEY = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)(?:\[(?P<op>[^\]]*)\])?$")
_TRUE = frozenset({"true", "1", "yes"})
_FALSE = frozenset({"false", "0", "no"})


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class SortKey:
    field: str
    direction: SortDirection = SortDirection.ASC


DEFAULT_SORT = (SortKey("created_at", SortDirection.DESC),)
TIE_BREAK = SortKey("id", SortDirection.ASC)


@dataclass(frozen=True)
class ListQuery:
    """Validated plan for one collection request."""
    filters: dict[str, dict[Comparator, Any]] = field(default_factory=dict)
    sort_keys: tuple[SortKey, ...] = DEFAULT_SORT + (TIE_BREAK,)
    selected_fields: tuple[str, ...] | None = None
    page: int = DEFAULT_PAGE
    page_size: int = 25
    populate: tuple[str, ...] = ()

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_count: int
    prev_page: int | None = None
    next_page: int | None = None

    def to_dict(self) -> dict:
        out: dict[str, int] = {
            "currentPage": self.current_page,
            "totalCount": self.total_count,
        }
        if self.prev_page is not None:
            out["prevPage"] = self.prev_page
        if self.next_page is not None:
            out["nextPage"] = self.next_page
        return out


@dataclass
class ListResult:
    """Resolved page of a ListQuery."""
    items: list[dict]
    total_count: int
    pagination: Pagination


# ─── Plan Construction ──────────────────────────────────────────

def build_list_query(
    raw_params: Mapping[str, str] | Iterable[tuple[str, str]],
    fields: ResourceFields,
    base_filter: Mapping[str, Any] | None = None,
    *,
    default_limit: int = 25,
    max_limit: int = 100,
) -> ListQuery:
    """Build a ListQuery from query-string pairs; raise ValidationFailedError on bad input.

    base_filter holds server-side equality constraints (e.g. the parent bootcamp
    of a nested route). They are applied as given and override client filters
    on the same field.
    """
    errors: list[str] = []
    directives: dict[str, str] = {}
    filters: dict[str, dict[Comparator, Any]] = {}

    for key, value in _iter_params(raw_params):
        if key in RESERVED_PARAMS:
            directives[key] = value
            continue
        _add_filter(filters, key, value, fields, errors)

    for name, value in (base_filter or {}).items():
        filters.setdefault(name, {})[Comparator.EQ] = value

    selected = _parse_select(directives.get("select"), fields, errors)
    sort_keys = _parse_sort(directives.get("sort"), fields, errors)
    populate = _parse_populate(directives.get("populate"), fields, errors)
    page = _parse_positive_int("page", directives.get("page"), DEFAULT_PAGE, errors)
    page_size = _parse_positive_int(
        "limit", directives.get("limit"), default_limit, errors,
    )
    if page_size > max_limit:
        errors.append(f"limit cannot exceed {max_limit}")
    elif (page - 1) * page_size > MAX_SQL_INTEGER:
        errors.append("page is out of range")

    if errors:
        raise ValidationFailedError(", ".join(errors), details=errors)
    return ListQuery(
        filters=filters,
        sort_keys=sort_keys,
        selected_fields=selected,
        page=page,
        page_size=page_size,
        populate=populate,
    )


def paginate(page: int, page_size: int, total_count: int) -> Pagination:
    """Pagination metadata: next iff skip + limit < total, prev iff page > 1."""
    skip = (page - 1) * page_size
    return Pagination(
        current_page=page,
        total_count=total_count,
        prev_page=page - 1 if page > 1 else None,
        next_page=page + 1 if skip + page_size < total_count else None,
    )


def project_fields(record: dict, selected: Iterable[str] | None) -> dict:
    """Keep only the selected keys of a serialized record, in selection order."""
    if selected is None:
        return record
    return {name: record[name] for name in selected if name in record}


# ─── Parsing Helpers ────────────────────────────────────────────

def _iter_params(raw_params) -> Iterable[tuple[str, str]]:
    if hasattr(raw_params, "multi_items"):
        return raw_params.multi_items()
    if isinstance(raw_params, Mapping):
        return raw_params.items()
    return raw_params


def _add_filter(
    filters: dict[str, dict[Comparator, Any]],
    key: str,
    value: str,
    fields: ResourceFields,
    errors: list[str],
) -> None:
    match = _FILTER_KEY.match(key)
    if not match:
        errors.append(f"Invalid query parameter '{key}'")
        return
    spec = fields.lookup(match["field"])
    if spec is None or not spec.filterable:
        errors.append(f"Cannot filter {fields.resource} by '{match['field']}'")
        return

    op = match["op"]
    if op is None:
        comparator = Comparator.EQ
    else:
        try:
            comparator = Comparator(op)
        except ValueError:
            comparator = None
        if comparator not in QUERY_COMPARATORS:
            errors.append(f"Unsupported comparator '{op}' on '{spec.name}'")
            return
    if comparator in RANGE_COMPARATORS and spec.type in (
        FieldType.BOOLEAN, FieldType.UUID,
    ):
        errors.append(f"Comparator '{op}' not supported on '{spec.name}'")
        return

    ops = filters.setdefault(spec.name, {})
    if comparator == Comparator.IN:
        parts = _split(value)
        if not parts:
            errors.append(f"'{spec.name}[in]' needs at least one value")
            return
        coerced = [_coerce(spec, p, errors) for p in parts]
        ops.setdefault(Comparator.IN, []).extend(coerced)
    else:
        ops[comparator] = _coerce(spec, value, errors)


def _coerce(spec: FieldSpec, raw: str, errors: list[str]) -> Any:
    try:
        if spec.type == FieldType.INTEGER:
            value = int(raw)
            if not MIN_SQL_INTEGER <= value <= MAX_SQL_INTEGER:
                raise ValueError(raw)
            return value
        if spec.type == FieldType.FLOAT:
            value = float(raw)
            if not math.isfinite(value):
                raise ValueError(raw)
            return value
        if spec.type == FieldType.BOOLEAN:
            lowered = raw.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(raw)
        if spec.type == FieldType.DATETIME:
            return datetime.fromisoformat(raw)
        if spec.type == FieldType.UUID:
            return UUID(raw)
    except ValueError:
        errors.append(f"Invalid {spec.type.value} value '{raw}' for '{spec.name}'")
        return None
    return raw


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_select(
    raw: str | None, fields: ResourceFields, errors: list[str],
) -> tuple[str, ...] | None:
    if raw is None:
        return None
    selected = ["id"]
    for name in _split(raw):
        spec = fields.lookup(name)
        if spec is None:
            errors.append(f"Cannot select '{name}' on {fields.resource}")
        elif spec.name not in selected:
            selected.append(spec.name)
    return tuple(selected)


def _parse_sort(
    raw: str | None, fields: ResourceFields, errors: list[str],
) -> tuple[SortKey, ...]:
    if raw is None:
        keys = list(DEFAULT_SORT)
    else:
        keys = []
        seen: set[str] = set()
        for token in _split(raw):
            direction = SortDirection.ASC
            name = token
            if token.startswith("-"):
                direction, name = SortDirection.DESC, token[1:]
            spec = fields.lookup(name)
            if spec is None or not spec.sortable:
                errors.append(f"Cannot sort {fields.resource} by '{name}'")
                continue
            if spec.name in seen:
                continue
            seen.add(spec.name)
            keys.append(SortKey(spec.name, direction))
        if not keys and not errors:
            keys = list(DEFAULT_SORT)
    if all(key.field != TIE_BREAK.field for key in keys):
        keys.append(TIE_BREAK)
    return tuple(keys)


def _parse_populate(
    raw: str | None, fields: ResourceFields, errors: list[str],
) -> tuple[str, ...]:
    if raw is None:
        return ()
    names: list[str] = []
    for name in _split(raw):
        rel = fields.relation(name)
        if rel is None:
            errors.append(f"Cannot populate '{name}' on {fields.resource}")
        elif rel.name not in names:
            names.append(rel.name)
    return tuple(names)


def _parse_positive_int(
    name: str, raw: str | None, default: int, errors: list[str],
) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        errors.append(f"{name} must be a positive integer")
        return default
    if value < 1:
        errors.append(f"{name} must be a positive integer")
        return default
    if value > MAX_SQL_INTEGER:
        errors.append(f"{name} is out of range")
        return default
    return value
