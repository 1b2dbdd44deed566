"""Comment model and comment reactions."""

import uuid
from typing import ClassVar

from sqlalchemy import Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from newtube.models.base import Base, TimestampMixin
from newtube.models.video import ReactionType, _enum_values


class Comment(Base, TimestampMixin):
    """Free-text comment on a video."""

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"))
    value: Mapped[str] = mapped_column(Text)

    __table_args__ = (Index("ix_comment_video_updated", "video_id", "updated_at", "id"),)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, video_id={self.video_id})>"


class CommentReaction(Base, TimestampMixin):
    """At most one reaction per (user, comment)."""

    __tablename__ = "comment_reactions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    comment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type", values_callable=_enum_values)
    )

    target_column: ClassVar[str] = "comment_id"
