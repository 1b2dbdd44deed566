"""Dialect-specific INSERT constructs with ON CONFLICT support."""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(db: AsyncSession, model: Any):
    """Build an INSERT that supports ``on_conflict_do_update``/``do_nothing``.

    The conflict target is always a composite primary key, which makes the
    upsert a single atomic statement at the storage layer.
    """
    dialect = db.bind.dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Atomic upsert is not available on {dialect}")
