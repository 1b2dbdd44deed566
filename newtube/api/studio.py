"""Creator studio procedures: the actor's own videos, private ones included."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.api.common import dump_cursor, parse_cursor
from newtube.auth import ActorContext
from newtube.db import get_db
from newtube.db.crud import get_user_video, list_user_videos
from newtube.errors import NotFound
from newtube.models.schemas import IdInput, PageInput, VideoPage, VideoRead

router = APIRouter()


@router.post("/studio.getOne", response_model=VideoRead)
async def get_one_studio_video(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoRead:
    video = await get_user_video(db, data.id, ctx.actor_id)
    if not video:
        raise NotFound("Video not found")
    return VideoRead.model_validate(video)


@router.post("/studio.getMany", response_model=VideoPage)
async def get_many_studio_videos(
    data: PageInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoPage:
    items, next_cursor, total = await list_user_videos(
        db,
        ctx.actor_id,
        limit=data.limit,
        cursor=parse_cursor(data.cursor),
    )
    return VideoPage(items=items, next_cursor=dump_cursor(next_cursor), total_count=total)
