"""Pydantic schemas for procedure inputs and outputs."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from newtube.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, THUMBNAIL_PROMPT_MIN_LENGTH
from newtube.models.video import ReactionType as ReactionTypeEnum
from newtube.models.video import VideoVisibility as VideoVisibilityEnum


# User schemas
class UserRead(BaseModel):
    """Public profile projection of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    image_url: str


class VideoOwnerRead(UserRead):
    """Owner profile as seen from a video page."""

    subscriber_count: int = 0
    viewer_subscribed: bool = False


# Category schemas
class CategoryRead(BaseModel):
    """Category read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None


# Video schemas
class VideoRead(BaseModel):
    """All base columns of a video."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    category_id: uuid.UUID | None = None
    title: str
    description: str | None = None
    duration: int
    visibility: VideoVisibilityEnum
    thumbnail_url: str | None = None
    thumbnail_key: str | None = None
    preview_url: str | None = None
    preview_key: str | None = None
    mux_status: str | None = None
    mux_asset_id: str | None = None
    mux_upload_id: str | None = None
    mux_playback_id: str | None = None
    mux_track_id: str | None = None
    mux_track_status: str | None = None
    created_at: datetime
    updated_at: datetime


class VideoStats(BaseModel):
    """Derived counts, computed per query from the fact tables."""

    view_count: int = 0
    like_count: int = 0
    dislike_count: int = 0


class VideoDetail(VideoRead, VideoStats):
    """Denormalized video page: counts plus the requesting viewer's own state."""

    user: VideoOwnerRead
    viewer_reaction: ReactionTypeEnum | None = None


class VideoListItem(VideoRead, VideoStats):
    """Video row in a feed or studio listing."""

    user: UserRead


class VideoPage(BaseModel):
    """One page of videos."""

    items: list[VideoListItem]
    next_cursor: str | None = None
    total_count: int


class VideoCreated(BaseModel):
    """Response of videos.create: the row plus where to upload the file."""

    video: VideoRead
    url: str


class VideoUpdate(BaseModel):
    """Editable video fields. Omitted fields are left unchanged."""

    id: uuid.UUID | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category_id: uuid.UUID | None = None
    visibility: VideoVisibilityEnum | None = None


class PageInput(BaseModel):
    """Keyset pagination parameters. ``cursor`` is opaque to clients."""

    cursor: str | None = None
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class VideoListInput(PageInput):
    category_id: uuid.UUID | None = None


class IdInput(BaseModel):
    id: uuid.UUID


class GenerateThumbnailInput(BaseModel):
    id: uuid.UUID
    prompt: str = Field(min_length=THUMBNAIL_PROMPT_MIN_LENGTH)


class WorkflowTriggered(BaseModel):
    workflow_run_id: str


# Views and reactions
class VideoTargetInput(BaseModel):
    video_id: uuid.UUID


class CommentTargetInput(BaseModel):
    comment_id: uuid.UUID


class VideoViewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    video_id: uuid.UUID
    created_at: datetime


class ReactionState(BaseModel):
    """Reaction left on a target after a toggle (None when removed)."""

    target_id: uuid.UUID
    type: ReactionTypeEnum | None = None


# Comment schemas
class CommentCreate(BaseModel):
    video_id: uuid.UUID
    value: str = Field(min_length=1)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    video_id: uuid.UUID
    value: str
    created_at: datetime
    updated_at: datetime


class CommentDetail(CommentRead):
    user: UserRead
    like_count: int = 0
    dislike_count: int = 0
    viewer_reaction: ReactionTypeEnum | None = None


class CommentListInput(PageInput):
    video_id: uuid.UUID


class CommentPage(BaseModel):
    items: list[CommentDetail]
    next_cursor: str | None = None
    total_count: int


# Subscription schemas
class SubscriptionInput(BaseModel):
    user_id: uuid.UUID


class SubscriptionKey(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    viewer_id: uuid.UUID
    creator_id: uuid.UUID


class SubscriptionRead(SubscriptionKey):
    created_at: datetime
