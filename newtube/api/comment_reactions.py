"""Like/dislike toggles on comments."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.auth import ActorContext, RequestContext
from newtube.db import get_db
from newtube.db.crud import get_comment, toggle_reaction
from newtube.errors import NotFound
from newtube.models import CommentReaction, ReactionType
from newtube.models.schemas import CommentTargetInput, ReactionState

router = APIRouter()


async def _toggle(
    db: AsyncSession,
    ctx: RequestContext,
    data: CommentTargetInput,
    reaction_type: ReactionType,
) -> ReactionState:
    if not await get_comment(db, data.comment_id):
        raise NotFound("Comment not found")
    state = await toggle_reaction(db, CommentReaction, ctx.actor_id, data.comment_id, reaction_type)
    return ReactionState(target_id=data.comment_id, type=state)


@router.post("/commentReactions.like", response_model=ReactionState)
async def like_comment(
    data: CommentTargetInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReactionState:
    return await _toggle(db, ctx, data, ReactionType.LIKE)


@router.post("/commentReactions.dislike", response_model=ReactionState)
async def dislike_comment(
    data: CommentTargetInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReactionState:
    return await _toggle(db, ctx, data, ReactionType.DISLIKE)
