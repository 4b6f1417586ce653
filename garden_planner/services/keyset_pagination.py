"""
Keyset (cursor) pagination over SQLAlchemy selects.

The sort key is a tuple of columns sharing one direction; every column after the first is a
strict tie-break, so rows with equal primary values still get a total order and are never
skipped or repeated across pages. Fetches limit + 1 rows to detect the next page.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import Select, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from garden_planner.services.cursor_codec import CursorCodec

T = TypeVar("T")

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results; next_cursor is None at the end of the sequence."""

    items: List[T]
    next_cursor: Optional[str]


@dataclass(frozen=True)
class KeysetOrder:
    """
    Sort key for a resource.
    columns: (name, column) pairs in priority order; names match the codec's payload fields.
    row_key: builds the cursor payload from a returned row.
    """

    columns: Sequence[tuple[str, ColumnElement[Any]]]
    direction: str
    codec: CursorCodec
    row_key: Callable[[Any], Dict[str, Any]]

    @property
    def descending(self) -> bool:
        return self.direction == DESC


def keyset_condition(
    columns: Sequence[ColumnElement[Any]],
    values: Sequence[Any],
    descending: bool,
) -> ColumnElement[bool]:
    """
    Rows strictly after the boundary in sort order:
    c1 op v1 OR (c1 = v1 AND c2 op v2) OR (c1 = v1 AND c2 = v2 AND c3 op v3) ...
    op is > for ascending and < for descending.
    """
    branches = []
    for i, col in enumerate(columns):
        equal_prefix = [c == v for c, v in zip(columns[:i], values[:i])]
        beyond = col < values[i] if descending else col > values[i]
        branches.append(and_(*equal_prefix, beyond))
    return or_(*branches)


async def paginate(
    db: AsyncSession,
    stmt: Select,
    order: KeysetOrder,
    limit: int,
    cursor: Optional[str] = None,
) -> Page[Any]:
    """
    Execute stmt (already scoped and filtered by the caller) as one keyset page.
    An absent cursor starts at the beginning of the ordered sequence.
    """
    columns = [col for _, col in order.columns]
    if cursor:
        payload = order.codec.decode(cursor)
        values = [payload[name] for name, _ in order.columns]
        stmt = stmt.where(keyset_condition(columns, values, order.descending))

    stmt = stmt.order_by(*[col.desc() if order.descending else col.asc() for col in columns])
    stmt = stmt.limit(limit + 1)

    r = await db.execute(stmt)
    rows = list(r.scalars().all())

    if len(rows) > limit:
        items = rows[:limit]
        next_cursor = order.codec.encode(order.row_key(items[-1]))
    else:
        items = rows
        next_cursor = None
    return Page(items=items, next_cursor=next_cursor)
