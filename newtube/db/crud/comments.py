"""CRUD and aggregation queries for comments."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud.aggregates import count_reactions, viewer_ids
from newtube.models import Comment, CommentReaction, ReactionType, User
from newtube.models.schemas import CommentDetail, CommentRead, UserRead
from newtube.utils.pagination import Cursor, keyset_predicate, paginate


async def create_comment(
    db: AsyncSession,
    user_id: uuid.UUID,
    video_id: uuid.UUID,
    value: str,
) -> Comment:
    comment = Comment(user_id=user_id, video_id=video_id, value=value)
    db.add(comment)
    await db.commit()
    await db.refresh(comment)
    return comment


async def get_comment(db: AsyncSession, comment_id: uuid.UUID) -> Comment | None:
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def delete_comment(
    db: AsyncSession,
    comment_id: uuid.UUID,
    user_id: uuid.UUID,
) -> Comment | None:
    """Delete a comment only if ``user_id`` wrote it."""
    result = await db.execute(
        select(Comment).where(Comment.id == comment_id, Comment.user_id == user_id)
    )
    comment = result.scalar_one_or_none()
    if not comment:
        return None

    await db.delete(comment)
    await db.commit()
    return comment


def _detail(row: Row) -> CommentDetail:
    return CommentDetail(
        **CommentRead.model_validate(row.Comment).model_dump(),
        user=UserRead.model_validate(row.User),
        like_count=row.like_count,
        dislike_count=row.dislike_count,
        viewer_reaction=row.viewer_reaction,
    )


async def list_comments(
    db: AsyncSession,
    video_id: uuid.UUID,
    limit: int,
    cursor: Cursor | None = None,
    viewer_id: uuid.UUID | None = None,
) -> tuple[list[CommentDetail], Cursor | None, int]:
    """List a video's comments newest first with keyset pagination.

    Returns:
        Tuple of (items, next_cursor, total_count)
    """
    viewer_reactions = (
        select(CommentReaction.comment_id, CommentReaction.type)
        .where(CommentReaction.user_id.in_(viewer_ids(viewer_id)))
        .cte("viewer_reactions")
    )

    total_result = await db.execute(
        select(func.count()).select_from(Comment).where(Comment.video_id == video_id)
    )
    total = total_result.scalar_one()

    query = (
        select(
            Comment,
            User,
            count_reactions(CommentReaction, Comment.id, ReactionType.LIKE).label("like_count"),
            count_reactions(CommentReaction, Comment.id, ReactionType.DISLIKE).label(
                "dislike_count"
            ),
            viewer_reactions.c.type.label("viewer_reaction"),
        )
        .join(User, User.id == Comment.user_id)
        .outerjoin(viewer_reactions, viewer_reactions.c.comment_id == Comment.id)
        .where(Comment.video_id == video_id)
    )
    if cursor is not None:
        query = query.where(keyset_predicate(Comment.updated_at, Comment.id, cursor))
    query = query.order_by(Comment.updated_at.desc(), Comment.id.desc()).limit(limit + 1)

    result = await db.execute(query)
    rows, next_cursor = paginate(
        result.all(),
        limit,
        key=lambda row: Cursor(updated_at=row.Comment.updated_at, id=row.Comment.id),
    )
    return [_detail(row) for row in rows], next_cursor, total
