"""Reaction toggle for videos and comments."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud.upsert import dialect_insert
from newtube.models import CommentReaction, ReactionType, VideoReaction
from newtube.models.base import utcnow

ReactionModel = type[VideoReaction] | type[CommentReaction]


async def toggle_reaction(
    db: AsyncSession,
    model: ReactionModel,
    user_id: uuid.UUID,
    target_id: uuid.UUID,
    reaction_type: ReactionType,
) -> ReactionType | None:
    """Set ``user_id``'s reaction on a target.

    Reacting with the type already stored removes the row. Any other case
    upserts on the (user, target) key, so an opposite reaction overwrites
    the type in place instead of adding a second row.

    The removal path is a separate statement from the upsert. Two
    concurrent requests can therefore end in either state; last writer
    wins.

    Returns:
        The reaction type now stored, or None if it was removed
    """
    target_col = getattr(model, model.target_column)
    pair = (model.user_id == user_id, target_col == target_id)

    result = await db.execute(select(model.type).where(*pair, model.type == reaction_type))
    if result.scalar_one_or_none() is not None:
        await db.execute(delete(model).where(*pair))
        await db.commit()
        return None

    stmt = dialect_insert(db, model).values(
        user_id=user_id,
        type=reaction_type,
        **{model.target_column: target_id},
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", model.target_column],
        set_={"type": stmt.excluded.type, "updated_at": utcnow()},
    )
    await db.execute(stmt)
    await db.commit()
    return reaction_type


async def get_reaction(
    db: AsyncSession,
    model: ReactionModel,
    user_id: uuid.UUID,
    target_id: uuid.UUID,
) -> ReactionType | None:
    """Get the reaction a user left on a target."""
    target_col = getattr(model, model.target_column)
    result = await db.execute(
        select(model.type).where(model.user_id == user_id, target_col == target_id)
    )
    return result.scalar_one_or_none()
