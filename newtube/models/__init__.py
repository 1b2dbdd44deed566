"""SQLAlchemy models."""

from newtube.models.base import Base
from newtube.models.category import Category
from newtube.models.comment import Comment, CommentReaction
from newtube.models.subscription import Subscription
from newtube.models.user import User
from newtube.models.video import (
    ReactionType,
    Video,
    VideoReaction,
    VideoView,
    VideoVisibility,
)

__all__ = [
    "Base",
    "User",
    "Category",
    "Video",
    "VideoVisibility",
    "VideoView",
    "VideoReaction",
    "ReactionType",
    "Comment",
    "CommentReaction",
    "Subscription",
]
