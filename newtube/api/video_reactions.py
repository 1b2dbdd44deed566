"""Like/dislike toggles on videos."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.api.common import require_video
from newtube.auth import ActorContext, RequestContext
from newtube.db import get_db
from newtube.db.crud import toggle_reaction
from newtube.models import ReactionType, VideoReaction
from newtube.models.schemas import ReactionState, VideoTargetInput
from newtube.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


async def _toggle(
    db: AsyncSession,
    ctx: RequestContext,
    data: VideoTargetInput,
    reaction_type: ReactionType,
) -> ReactionState:
    await require_video(db, data.video_id)
    state = await toggle_reaction(db, VideoReaction, ctx.actor_id, data.video_id, reaction_type)
    ctx.log(logger).debug(f"Video {data.video_id} reaction is now {state}")
    return ReactionState(target_id=data.video_id, type=state)


@router.post("/videoReactions.like", response_model=ReactionState)
async def like_video(
    data: VideoTargetInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReactionState:
    """Like a video, or remove an existing like."""
    return await _toggle(db, ctx, data, ReactionType.LIKE)


@router.post("/videoReactions.dislike", response_model=ReactionState)
async def dislike_video(
    data: VideoTargetInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReactionState:
    """Dislike a video, or remove an existing dislike."""
    return await _toggle(db, ctx, data, ReactionType.DISLIKE)
