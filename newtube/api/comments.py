"""Comment procedures."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.api.common import dump_cursor, parse_cursor, require_video
from newtube.auth import ActorContext, PublicContext
from newtube.db import get_db
from newtube.db.crud import create_comment, delete_comment, list_comments
from newtube.errors import NotFound
from newtube.models.schemas import (
    CommentCreate,
    CommentListInput,
    CommentPage,
    CommentRead,
    IdInput,
)

router = APIRouter()


@router.post("/comments.create", response_model=CommentRead)
async def create_comment_procedure(
    data: CommentCreate,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentRead:
    await require_video(db, data.video_id)
    comment = await create_comment(db, ctx.actor_id, data.video_id, data.value)
    return CommentRead.model_validate(comment)


@router.post("/comments.getMany", response_model=CommentPage)
async def get_many_comments_procedure(
    data: CommentListInput,
    ctx: PublicContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentPage:
    """Comments of a video, newest first, with like/dislike counts."""
    cursor = parse_cursor(data.cursor)
    await require_video(db, data.video_id)
    items, next_cursor, total = await list_comments(
        db,
        data.video_id,
        limit=data.limit,
        cursor=cursor,
        viewer_id=ctx.actor_id,
    )
    return CommentPage(items=items, next_cursor=dump_cursor(next_cursor), total_count=total)


@router.post("/comments.remove", response_model=CommentRead)
async def remove_comment_procedure(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentRead:
    """Delete a comment written by the actor."""
    comment = await delete_comment(db, data.id, ctx.actor_id)
    if not comment:
        raise NotFound("Comment not found")
    return CommentRead.model_validate(comment)
