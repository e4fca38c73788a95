"""List Query Execution — runs a validated ListQuery against one ORM model.

Invariants:
    - Count and page are computed from the same filter conditions
    - ORDER BY follows query.sort_keys exactly (tie-break already included)
    - Populated relations are eager-loaded (selectinload), never lazy-loaded
    - Output records are plain dicts, already projected to the selected fields

Design Decisions:
    - Comparator handlers in a dict keyed by Comparator: one lookup, no if-chain
    - Two statements (COUNT, then page) instead of a window function: portable
      across PostgreSQL and SQLite and cheap at this table size
"""

from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devcamper.core.domain_types import Comparator, SortDirection
from devcamper.core.list_query import ListQuery, ListResult, paginate, project_fields
from devcamper.core.resource_fields import ResourceFields

_COMPARATOR_HANDLERS: dict[Comparator, Callable[[Any, Any], Any]] = {
    Comparator.EQ: lambda column, value: column == value,
    Comparator.GT: lambda column, value: column > value,
    Comparator.GTE: lambda column, value: column >= value,
    Comparator.LT: lambda column, value: column < value,
    Comparator.LTE: lambda column, value: column <= value,
    Comparator.IN: lambda column, value: column.in_(value),
}


def build_conditions(model: type, query: ListQuery) -> list:
    conditions = []
    for name, ops in query.filters.items():
        column = getattr(model, name)
        for comparator, value in ops.items():
            conditions.append(_COMPARATOR_HANDLERS[comparator](column, value))
    return conditions


def build_order_by(model: type, query: ListQuery) -> list:
    order = []
    for key in query.sort_keys:
        column = getattr(model, key.field)
        order.append(column.desc() if key.direction == SortDirection.DESC else column.asc())
    return order


def serialize_row(
    row: Any,
    fields: ResourceFields,
    populate: Iterable[str] = (),
    selected: Iterable[str] | None = None,
) -> dict:
    """Serialize an ORM row, keep selected fields, embed populated relations."""
    record = project_fields(row.to_dict(), selected)
    for name in populate:
        rel = fields.relation(name)
        related = getattr(row, rel.name)
        record[rel.name] = (
            project_fields(related.to_dict(), rel.fields) if related else None
        )
    return record


async def execute_list_query(
    db: AsyncSession, model: type, fields: ResourceFields, query: ListQuery,
) -> ListResult:
    """Run COUNT over the filtered set, then fetch the requested page."""
    conditions = build_conditions(model, query)

    total_count = await db.scalar(
        select(func.count()).select_from(model).where(*conditions),
    ) or 0

    stmt = (
        select(model)
        .where(*conditions)
        .order_by(*build_order_by(model, query))
        .offset(query.skip)
        .limit(query.page_size)
    )
    for name in query.populate:
        stmt = stmt.options(selectinload(getattr(model, name)))

    rows = (await db.execute(stmt)).scalars().all()
    items = [
        serialize_row(row, fields, query.populate, query.selected_fields)
        for row in rows
    ]
    return ListResult(
        items=items,
        total_count=total_count,
        pagination=paginate(query.page, query.page_size, total_count),
    )
