"""Keyset (cursor) pagination.

Rows are ordered by ``(updated_at DESC, id DESC)``. The id tie-break gives a
strict total order even when several rows share a timestamp, so following
``next_cursor`` visits every row of a snapshot exactly once. Rows inserted
between calls with a newer ``updated_at`` never show up in pages that were
already issued.
"""

import base64
import json
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, and_, or_

T = TypeVar("T")


@dataclass(frozen=True)
class Cursor:
    """Sort key of the last row of a page."""

    updated_at: datetime
    id: uuid.UUID


def encode_cursor(cursor: Cursor) -> str:
    """Encode a cursor to an opaque URL-safe string."""
    payload = {"updated_at": cursor.updated_at.isoformat(), "id": str(cursor.id)}
    json_str = json.dumps(payload, sort_keys=True)
    return base64.urlsafe_b64encode(json_str.encode()).decode()


def decode_cursor(value: str) -> Cursor | None:
    """Decode a cursor string.

    Returns:
        The cursor, or None if the string is not a valid cursor
    """
    try:
        json_str = base64.urlsafe_b64decode(value.encode()).decode()
        data = json.loads(json_str)
        return Cursor(
            updated_at=datetime.fromisoformat(data["updated_at"]),
            id=uuid.UUID(data["id"]),
        )
    except (ValueError, TypeError, KeyError, UnicodeDecodeError):
        return None


def keyset_predicate(
    updated_col: Any,
    id_col: Any,
    cursor: Cursor,
) -> ColumnElement[bool]:
    """Rows strictly after ``cursor`` in ``(updated_at DESC, id DESC)`` order."""
    return or_(
        updated_col < cursor.updated_at,
        and_(updated_col == cursor.updated_at, id_col < cursor.id),
    )


def paginate(
    rows: Sequence[T],
    limit: int,
    key: Callable[[T], Cursor],
) -> tuple[list[T], Cursor | None]:
    """Split an over-fetched result (``limit + 1`` rows) into a page.

    Args:
        rows: Rows fetched with ``LIMIT limit + 1``
        limit: Requested page size
        key: Extracts the sort key from a row

    Returns:
        Tuple of (items, next_cursor). next_cursor is None on the last page.
    """
    has_more = len(rows) > limit
    items = list(rows[:limit]) if has_more else list(rows)
    next_cursor = key(items[-1]) if has_more and items else None
    return items, next_cursor
