"""CRUD operations for subscriptions."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud.upsert import dialect_insert
from newtube.models import Subscription


async def create_subscription(
    db: AsyncSession,
    viewer_id: uuid.UUID,
    creator_id: uuid.UUID,
) -> Subscription:
    """Subscribe ``viewer_id`` to ``creator_id``. Subscribing twice is a no-op."""
    stmt = dialect_insert(db, Subscription).values(viewer_id=viewer_id, creator_id=creator_id)
    await db.execute(stmt.on_conflict_do_nothing(index_elements=["viewer_id", "creator_id"]))
    await db.commit()

    result = await db.execute(
        select(Subscription).where(
            Subscription.viewer_id == viewer_id,
            Subscription.creator_id == creator_id,
        )
    )
    return result.scalar_one()


async def delete_subscription(
    db: AsyncSession,
    viewer_id: uuid.UUID,
    creator_id: uuid.UUID,
) -> bool:
    """Remove a subscription.

    Returns:
        True if a row was deleted
    """
    result = await db.execute(
        delete(Subscription).where(
            Subscription.viewer_id == viewer_id,
            Subscription.creator_id == creator_id,
        )
    )
    await db.commit()
    return result.rowcount > 0
