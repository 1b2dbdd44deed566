"""CRUD and aggregation queries for videos."""

import uuid
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.constants import VIDEO_DEFAULT_TITLE, VIDEO_UPLOAD_STATUS
from newtube.db.crud.aggregates import (
    count_reactions,
    count_subscribers,
    count_views,
    viewer_ids,
)
from newtube.models import (
    ReactionType,
    Subscription,
    User,
    Video,
    VideoReaction,
    VideoVisibility,
)
from newtube.models.schemas import (
    UserRead,
    VideoDetail,
    VideoListItem,
    VideoOwnerRead,
    VideoRead,
    VideoUpdate,
)
from newtube.utils.pagination import Cursor, keyset_predicate, paginate


async def get_video(db: AsyncSession, video_id: uuid.UUID) -> Video | None:
    """Get a video by ID regardless of owner."""
    result = await db.execute(select(Video).where(Video.id == video_id))
    return result.scalar_one_or_none()


async def get_user_video(
    db: AsyncSession,
    video_id: uuid.UUID,
    user_id: uuid.UUID,
) -> Video | None:
    """Get a video only if ``user_id`` owns it."""
    result = await db.execute(
        select(Video).where(Video.id == video_id, Video.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_video(db: AsyncSession, user_id: uuid.UUID, upload_id: str) -> Video:
    """Insert a placeholder video waiting for its upload to finish."""
    video = Video(
        user_id=user_id,
        title=VIDEO_DEFAULT_TITLE,
        mux_status=VIDEO_UPLOAD_STATUS,
        mux_upload_id=upload_id,
    )
    db.add(video)
    await db.commit()
    await db.refresh(video)
    return video


async def update_video(
    db: AsyncSession,
    video_id: uuid.UUID,
    user_id: uuid.UUID,
    data: VideoUpdate,
) -> Video | None:
    """Update the editable fields of an owned video.

    Only fields present in the request are written, so ``category_id`` can
    be cleared by sending it as null.
    """
    video = await get_user_video(db, video_id, user_id)
    if not video:
        return None

    fields = data.model_dump(exclude_unset=True, exclude={"id"})
    # title and visibility are NOT NULL
    for required in ("title", "visibility"):
        if fields.get(required) is None:
            fields.pop(required, None)

    for field, value in fields.items():
        setattr(video, field, value)

    await db.commit()
    await db.refresh(video)
    return video


async def delete_video(db: AsyncSession, video_id: uuid.UUID, user_id: uuid.UUID) -> Video | None:
    """Delete an owned video. Views, reactions and comments cascade."""
    video = await get_user_video(db, video_id, user_id)
    if not video:
        return None

    await db.delete(video)
    await db.commit()
    return video


async def set_thumbnail(
    db: AsyncSession,
    video: Video,
    url: str | None,
    key: str | None,
) -> Video:
    """Point a video at a stored thumbnail (or clear it with None)."""
    video.thumbnail_url = url
    video.thumbnail_key = key
    await db.commit()
    await db.refresh(video)
    return video


# =============================================================================
# Media pipeline projection
# =============================================================================


async def update_video_by_upload_id(db: AsyncSession, upload_id: str, **values: Any) -> int:
    """Mirror pipeline state onto the video created for ``upload_id``."""
    result = await db.execute(
        update(Video).where(Video.mux_upload_id == upload_id).values(**values)
    )
    await db.commit()
    return result.rowcount


async def update_video_by_asset_id(db: AsyncSession, asset_id: str, **values: Any) -> int:
    """Mirror pipeline state onto the video backing ``asset_id``."""
    result = await db.execute(
        update(Video).where(Video.mux_asset_id == asset_id).values(**values)
    )
    await db.commit()
    return result.rowcount


async def delete_video_by_upload_id(db: AsyncSession, upload_id: str) -> int:
    result = await db.execute(delete(Video).where(Video.mux_upload_id == upload_id))
    await db.commit()
    return result.rowcount


# =============================================================================
# Aggregation
# =============================================================================


def _stats_columns() -> tuple:
    return (
        count_views(Video.id).label("view_count"),
        count_reactions(VideoReaction, Video.id, ReactionType.LIKE).label("like_count"),
        count_reactions(VideoReaction, Video.id, ReactionType.DISLIKE).label("dislike_count"),
    )


async def get_video_detail(
    db: AsyncSession,
    video_id: uuid.UUID,
    viewer_id: uuid.UUID | None = None,
) -> VideoDetail | None:
    """Build the denormalized video page in a single query.

    Viewer-scoped fields come from side queries restricted to the viewer's
    own rows and left-joined onto the video, so the base row is never
    duplicated. An anonymous viewer gets an empty identity set and
    therefore null viewer fields.
    """
    ids = viewer_ids(viewer_id)
    viewer_reactions = (
        select(VideoReaction.video_id, VideoReaction.type)
        .where(VideoReaction.user_id.in_(ids))
        .cte("viewer_reactions")
    )
    viewer_subscriptions = (
        select(Subscription.creator_id)
        .where(Subscription.viewer_id.in_(ids))
        .cte("viewer_subscriptions")
    )

    query = (
        select(
            Video,
            User,
            *_stats_columns(),
            count_subscribers(Video.user_id).label("subscriber_count"),
            viewer_reactions.c.type.label("viewer_reaction"),
            viewer_subscriptions.c.creator_id.is_not(None).label("viewer_subscribed"),
        )
        .join(User, User.id == Video.user_id)
        .outerjoin(viewer_reactions, viewer_reactions.c.video_id == Video.id)
        .outerjoin(viewer_subscriptions, viewer_subscriptions.c.creator_id == Video.user_id)
        .where(Video.id == video_id)
    )
    result = await db.execute(query)
    row = result.one_or_none()
    if row is None:
        return None

    owner = VideoOwnerRead(
        **UserRead.model_validate(row.User).model_dump(),
        subscriber_count=row.subscriber_count,
        viewer_subscribed=bool(row.viewer_subscribed),
    )
    return VideoDetail(
        **VideoRead.model_validate(row.Video).model_dump(),
        user=owner,
        view_count=row.view_count,
        like_count=row.like_count,
        dislike_count=row.dislike_count,
        viewer_reaction=row.viewer_reaction,
    )


def _list_item(row: Row) -> VideoListItem:
    return VideoListItem(
        **VideoRead.model_validate(row.Video).model_dump(),
        user=UserRead.model_validate(row.User),
        view_count=row.view_count,
        like_count=row.like_count,
        dislike_count=row.dislike_count,
    )


async def list_videos(
    db: AsyncSession,
    limit: int,
    cursor: Cursor | None = None,
    category_id: uuid.UUID | None = None,
    owner_id: uuid.UUID | None = None,
    public_only: bool = True,
) -> tuple[list[VideoListItem], Cursor | None, int]:
    """List videos newest first with keyset pagination.

    Args:
        public_only: Restrict to public videos (feeds). Studio listings pass
            ``owner_id`` and False to include private videos.

    Returns:
        Tuple of (items, next_cursor, total_count). The total ignores the
        cursor so it stays stable across pages.
    """
    filters = []
    if public_only:
        filters.append(Video.visibility == VideoVisibility.PUBLIC)
    if owner_id is not None:
        filters.append(Video.user_id == owner_id)
    if category_id is not None:
        filters.append(Video.category_id == category_id)

    total_result = await db.execute(select(func.count()).select_from(Video).where(*filters))
    total = total_result.scalar_one()

    query = (
        select(Video, User, *_stats_columns())
        .join(User, User.id == Video.user_id)
        .where(*filters)
    )
    if cursor is not None:
        query = query.where(keyset_predicate(Video.updated_at, Video.id, cursor))
    query = query.order_by(Video.updated_at.desc(), Video.id.desc()).limit(limit + 1)

    result = await db.execute(query)
    rows, next_cursor = paginate(
        result.all(),
        limit,
        key=lambda row: Cursor(updated_at=row.Video.updated_at, id=row.Video.id),
    )
    return [_list_item(row) for row in rows], next_cursor, total


async def list_user_videos(
    db: AsyncSession,
    user_id: uuid.UUID,
    limit: int,
    cursor: Cursor | None = None,
) -> tuple[list[VideoListItem], Cursor | None, int]:
    """Studio listing: every video the user owns, private ones included."""
    return await list_videos(db, limit, cursor=cursor, owner_id=user_id, public_only=False)
