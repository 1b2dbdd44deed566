"""Video model and the view/reaction fact tables attached to it."""

import enum
import uuid
from typing import ClassVar

from sqlalchemy import Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from newtube.models.base import Base, TimestampMixin


class VideoVisibility(str, enum.Enum):
    """Who can see a video."""

    PRIVATE = "private"
    PUBLIC = "public"


class ReactionType(str, enum.Enum):
    """Emotion a user attaches to a video or comment."""

    LIKE = "like"
    DISLIKE = "dislike"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Video(Base, TimestampMixin):
    """Uploaded video.

    The ``mux_*`` columns mirror the transcoding state reported by the media
    pipeline. A video starts in the ``waiting`` upload state and becomes
    ``ready`` when the pipeline says so.
    """

    __tablename__ = "videos"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, default=0)  # milliseconds
    visibility: Mapped[VideoVisibility] = mapped_column(
        Enum(VideoVisibility, name="video_visibility", values_callable=_enum_values),
        default=VideoVisibility.PRIVATE,
    )

    # Assets in object storage
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_key: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Media pipeline projection
    mux_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mux_asset_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_upload_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_playback_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_track_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_track_status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        Index("ix_video_visibility_updated", "visibility", "updated_at", "id"),
        Index("ix_video_user_updated", "user_id", "updated_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title})>"


class VideoView(Base, TimestampMixin):
    """A user has viewed a video. One row per pair, never incremented."""

    __tablename__ = "video_views"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    video_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True, index=True
    )


class VideoReaction(Base, TimestampMixin):
    """At most one reaction per (user, video)."""

    __tablename__ = "video_reactions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    video_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type", values_callable=_enum_values)
    )

    target_column: ClassVar[str] = "video_id"
