"""Video view procedures."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.api.common import require_video
from newtube.auth import ActorContext
from newtube.db import get_db
from newtube.db.crud import record_view
from newtube.models.schemas import VideoTargetInput, VideoViewRead

router = APIRouter()


@router.post("/videoViews.create", response_model=VideoViewRead)
async def create_video_view(
    data: VideoTargetInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoViewRead:
    """Record a view. Each user counts once per video."""
    await require_video(db, data.video_id)
    view = await record_view(db, ctx.actor_id, data.video_id)
    return VideoViewRead.model_validate(view)
