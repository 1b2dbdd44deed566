"""Video view facts."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud.upsert import dialect_insert
from newtube.models import VideoView


async def record_view(db: AsyncSession, user_id: uuid.UUID, video_id: uuid.UUID) -> VideoView:
    """Record that a user viewed a video. Repeated views keep the first row."""
    stmt = dialect_insert(db, VideoView).values(user_id=user_id, video_id=video_id)
    await db.execute(stmt.on_conflict_do_nothing(index_elements=["user_id", "video_id"]))
    await db.commit()

    result = await db.execute(
        select(VideoView).where(VideoView.user_id == user_id, VideoView.video_id == video_id)
    )
    return result.scalar_one()
