"""Video procedures."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.api.common import dump_cursor, parse_cursor
from newtube.auth import ActorContext, PublicContext, RequestContext
from newtube.constants import (
    THUMBNAIL_CONTENT_TYPES,
    THUMBNAIL_MAX_BYTES,
    WORKFLOW_RETRIES,
)
from newtube.db import get_db
from newtube.db.crud import (
    create_video,
    delete_video,
    get_user_video,
    get_video_detail,
    list_videos,
    set_thumbnail,
    update_video,
)
from newtube.errors import BadRequest, InternalError, NotFound, UpstreamServiceError
from newtube.models import Video
from newtube.models.schemas import (
    GenerateThumbnailInput,
    IdInput,
    VideoCreated,
    VideoDetail,
    VideoListInput,
    VideoPage,
    VideoRead,
    VideoUpdate,
    WorkflowTriggered,
)
from newtube.services.mux import mux_client, thumbnail_url
from newtube.services.storage import storage_client
from newtube.services.workflow import workflow_client
from newtube.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


async def _owned_video(db: AsyncSession, ctx: RequestContext, video_id: uuid.UUID) -> Video:
    video = await get_user_video(db, video_id, ctx.actor_id)
    if not video:
        raise NotFound("Video not found")
    return video


async def _clear_thumbnail(db: AsyncSession, video: Video) -> Video:
    """Remove the stored thumbnail file, then forget it on the video."""
    if not video.thumbnail_key:
        return video
    await storage_client.delete_files(video.thumbnail_key)
    return await set_thumbnail(db, video, None, None)


@router.post("/videos.create", response_model=VideoCreated)
async def create_video_procedure(
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoCreated:
    """Create an upload on the media pipeline and its placeholder video."""
    upload = await mux_client.create_upload(passthrough=str(ctx.actor_id))
    video = await create_video(db, ctx.actor_id, upload.id)
    ctx.log(logger).info(f"Created video {video.id} for upload {upload.id}")
    return VideoCreated(video=VideoRead.model_validate(video), url=upload.url)


@router.post("/videos.update", response_model=VideoRead)
async def update_video_procedure(
    data: VideoUpdate,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoRead:
    """Update title, description, category or visibility of an owned video."""
    if not data.id:
        raise BadRequest("Missing video id")

    video = await update_video(db, data.id, ctx.actor_id, data)
    if not video:
        raise NotFound("Video not found")
    return VideoRead.model_validate(video)


@router.post("/videos.remove", response_model=VideoRead)
async def remove_video_procedure(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoRead:
    video = await delete_video(db, data.id, ctx.actor_id)
    if not video:
        raise NotFound("Video not found")
    ctx.log(logger).info(f"Removed video {video.id}")
    return VideoRead.model_validate(video)


@router.post("/videos.restoreThumbnail", response_model=VideoRead)
async def restore_thumbnail_procedure(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoRead:
    """Replace the thumbnail with the one generated by the media pipeline.

    The stored file is deleted before the row is cleared. If the row update
    fails afterwards the two systems disagree until the next reset.
    """
    video = await _owned_video(db, ctx, data.id)
    video = await _clear_thumbnail(db, video)

    if not video.mux_playback_id:
        raise BadRequest("Video has no playback id yet")

    try:
        stored = await storage_client.upload_from_url(thumbnail_url(video.mux_playback_id))
    except UpstreamServiceError as e:
        ctx.log(logger).error(f"Thumbnail restore failed for {video.id}: {e}")
        raise InternalError("Failed to upload thumbnail") from e

    video = await set_thumbnail(db, video, stored.url, stored.key)
    return VideoRead.model_validate(video)


@router.post("/videos.uploadThumbnail", response_model=VideoRead)
async def upload_thumbnail_procedure(
    id: Annotated[uuid.UUID, Form()],
    file: Annotated[UploadFile, File(description="Thumbnail image (max 4MB)")],
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoRead:
    """Upload a custom thumbnail for an owned video."""
    video = await _owned_video(db, ctx, id)

    if file.content_type not in THUMBNAIL_CONTENT_TYPES:
        raise BadRequest(f"Unsupported image type: {file.content_type}")

    content = await file.read()
    if not content:
        raise BadRequest("Empty file")
    if len(content) > THUMBNAIL_MAX_BYTES:
        raise BadRequest("Thumbnail exceeds 4MB")

    video = await _clear_thumbnail(db, video)

    try:
        stored = await storage_client.upload_file(
            file.filename or "thumbnail", content, file.content_type
        )
    except UpstreamServiceError as e:
        ctx.log(logger).error(f"Thumbnail upload failed for {video.id}: {e}")
        raise InternalError("Failed to upload thumbnail") from e

    video = await set_thumbnail(db, video, stored.url, stored.key)
    return VideoRead.model_validate(video)


async def _trigger_workflow(
    ctx: RequestContext,
    name: str,
    body: dict,
    retries: int | None = None,
) -> WorkflowTriggered:
    url = workflow_client.workflow_url(name)
    run_id = await workflow_client.trigger(url, body, retries=retries)
    ctx.log(logger).info(f"Triggered {name} workflow {run_id} for video {body['videoId']}")
    return WorkflowTriggered(workflow_run_id=run_id)


@router.post("/videos.generateThumbnail", response_model=WorkflowTriggered)
async def generate_thumbnail_procedure(
    data: GenerateThumbnailInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowTriggered:
    """Enqueue AI thumbnail generation from a prompt."""
    await _owned_video(db, ctx, data.id)
    body = {"userId": str(ctx.actor_id), "videoId": str(data.id), "prompt": data.prompt}
    return await _trigger_workflow(ctx, "thumbnail", body)


@router.post("/videos.generateTitle", response_model=WorkflowTriggered)
async def generate_title_procedure(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowTriggered:
    """Enqueue AI title generation from the video transcript."""
    await _owned_video(db, ctx, data.id)
    body = {"userId": str(ctx.actor_id), "videoId": str(data.id)}
    return await _trigger_workflow(ctx, "title", body, retries=WORKFLOW_RETRIES)


@router.post("/videos.generateDescription", response_model=WorkflowTriggered)
async def generate_description_procedure(
    data: IdInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowTriggered:
    """Enqueue AI description generation from the video transcript."""
    await _owned_video(db, ctx, data.id)
    body = {"userId": str(ctx.actor_id), "videoId": str(data.id)}
    return await _trigger_workflow(ctx, "description", body, retries=WORKFLOW_RETRIES)


@router.post("/videos.getOne", response_model=VideoDetail)
async def get_one_video_procedure(
    data: IdInput,
    ctx: PublicContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoDetail:
    """Video page: counts, owner profile and the caller's own reaction/subscription."""
    video = await get_video_detail(db, data.id, ctx.actor_id)
    if not video:
        raise NotFound("Video not found")
    return video


@router.post("/videos.getMany", response_model=VideoPage)
async def get_many_videos_procedure(
    data: VideoListInput,
    ctx: PublicContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoPage:
    """Public feed, newest first, optionally filtered by category."""
    items, next_cursor, total = await list_videos(
        db,
        limit=data.limit,
        cursor=parse_cursor(data.cursor),
        category_id=data.category_id,
    )
    return VideoPage(items=items, next_cursor=dump_cursor(next_cursor), total_count=total)
