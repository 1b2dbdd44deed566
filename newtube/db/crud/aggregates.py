"""Correlated count expressions shared by the aggregation queries.

Counts are derived from the fact tables on every read, never stored, so
they cannot drift from the rows they count.
"""

import uuid
from typing import Any

from sqlalchemy import ScalarSelect, func, select

from newtube.models import CommentReaction, ReactionType, Subscription, VideoReaction, VideoView


def viewer_ids(viewer_id: uuid.UUID | None) -> list[uuid.UUID]:
    """Identity set for viewer-scoped side queries (empty when anonymous)."""
    return [viewer_id] if viewer_id else []


def count_views(video_id: Any) -> ScalarSelect[int]:
    return (
        select(func.count())
        .select_from(VideoView)
        .where(VideoView.video_id == video_id)
        .scalar_subquery()
    )


def count_reactions(
    model: type[VideoReaction] | type[CommentReaction],
    target_id: Any,
    reaction_type: ReactionType,
) -> ScalarSelect[int]:
    target_col = getattr(model, model.target_column)
    return (
        select(func.count())
        .select_from(model)
        .where(target_col == target_id, model.type == reaction_type)
        .scalar_subquery()
    )


def count_subscribers(creator_id: Any) -> ScalarSelect[int]:
    return (
        select(func.count())
        .select_from(Subscription)
        .where(Subscription.creator_id == creator_id)
        .scalar_subquery()
    )
