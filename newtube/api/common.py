"""Helpers shared by procedures."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud import get_video
from newtube.errors import BadRequest, NotFound
from newtube.models import Video
from newtube.utils.pagination import Cursor, decode_cursor, encode_cursor


def parse_cursor(value: str | None) -> Cursor | None:
    """Decode a client-supplied cursor, rejecting malformed ones."""
    if value is None:
        return None
    cursor = decode_cursor(value)
    if cursor is None:
        raise BadRequest("Invalid cursor")
    return cursor


def dump_cursor(cursor: Cursor | None) -> str | None:
    return encode_cursor(cursor) if cursor else None


async def require_video(db: AsyncSession, video_id: uuid.UUID) -> Video:
    """Get the target video of an interaction or raise NotFound."""
    video = await get_video(db, video_id)
    if not video:
        raise NotFound("Video not found")
    return video
