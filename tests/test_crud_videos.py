"""Tests for video CRUD and aggregation queries."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud import (
    create_subscription,
    create_video,
    delete_video,
    get_user_video,
    get_video,
    get_video_detail,
    list_user_videos,
    list_videos,
    record_view,
    toggle_reaction,
    update_video,
    update_video_by_upload_id,
)
from newtube.models import ReactionType, User, Video, VideoReaction, VideoVisibility
from newtube.models.schemas import VideoUpdate


class TestVideoDetail:
    """Derived state of a single video."""

    @pytest.mark.asyncio
    async def test_counts_follow_views_and_reactions(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        """Owner u1 uploads, u2 views and toggles a like."""
        video = await make_video(test_user)

        detail = await get_video_detail(db_session, video.id)
        assert detail.viewer_reaction is None
        assert detail.view_count == 0

        await record_view(db_session, other_user.id, video.id)
        detail = await get_video_detail(db_session, video.id)
        assert detail.view_count == 1

        await toggle_reaction(db_session, VideoReaction, other_user.id, video.id, ReactionType.LIKE)
        detail = await get_video_detail(db_session, video.id, viewer_id=other_user.id)
        assert detail.like_count == 1
        assert detail.viewer_reaction == ReactionType.LIKE

        await toggle_reaction(db_session, VideoReaction, other_user.id, video.id, ReactionType.LIKE)
        detail = await get_video_detail(db_session, video.id, viewer_id=other_user.id)
        assert detail.like_count == 0
        assert detail.viewer_reaction is None

    @pytest.mark.asyncio
    async def test_viewer_fields_are_scoped_to_the_viewer(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        video = await make_video(test_user)
        await toggle_reaction(
            db_session, VideoReaction, other_user.id, video.id, ReactionType.DISLIKE
        )
        await create_subscription(db_session, other_user.id, test_user.id)

        as_other = await get_video_detail(db_session, video.id, viewer_id=other_user.id)
        assert as_other.viewer_reaction == ReactionType.DISLIKE
        assert as_other.user.viewer_subscribed is True
        assert as_other.user.subscriber_count == 1
        assert as_other.dislike_count == 1

        as_owner = await get_video_detail(db_session, video.id, viewer_id=test_user.id)
        assert as_owner.viewer_reaction is None
        assert as_owner.user.viewer_subscribed is False
        assert as_owner.user.subscriber_count == 1

        anonymous = await get_video_detail(db_session, video.id)
        assert anonymous.viewer_reaction is None
        assert anonymous.user.viewer_subscribed is False

    @pytest.mark.asyncio
    async def test_repeated_views_count_once(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        video = await make_video(test_user)

        await record_view(db_session, other_user.id, video.id)
        await record_view(db_session, other_user.id, video.id)
        await record_view(db_session, test_user.id, video.id)

        detail = await get_video_detail(db_session, video.id)
        assert detail.view_count == 2

    @pytest.mark.asyncio
    async def test_default_inserted_video_counts_from_zero(
        self, db_session: AsyncSession, test_user: User, other_user: User
    ):
        """A video inserted with column defaults is private and still aggregates."""
        video = Video(user_id=test_user.id, title="t")
        db_session.add(video)
        await db_session.commit()
        await db_session.refresh(video)
        assert video.visibility == VideoVisibility.PRIVATE

        detail = await get_video_detail(db_session, video.id)
        assert detail is not None
        assert detail.view_count == 0
        assert detail.viewer_reaction is None

        await record_view(db_session, other_user.id, video.id)
        await toggle_reaction(db_session, VideoReaction, other_user.id, video.id, ReactionType.LIKE)

        detail = await get_video_detail(db_session, video.id, viewer_id=other_user.id)
        assert detail.view_count == 1
        assert detail.like_count == 1
        assert detail.viewer_reaction == ReactionType.LIKE


class TestVideoOwnership:
    """Owner-filtered mutations."""

    @pytest.mark.asyncio
    async def test_create_video_defaults(self, db_session: AsyncSession, test_user: User):
        video = await create_video(db_session, test_user.id, "upload_123")

        assert video.title == "Untitled"
        assert video.mux_status == "waiting"
        assert video.mux_upload_id == "upload_123"
        assert video.visibility == VideoVisibility.PRIVATE
        assert video.duration == 0

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(
        self, db_session: AsyncSession, test_user: User, make_video
    ):
        video = await make_video(test_user, title="Original", description="Keep me")

        updated = await update_video(
            db_session, video.id, test_user.id, VideoUpdate(id=video.id, title="Renamed")
        )

        assert updated.title == "Renamed"
        assert updated.description == "Keep me"

    @pytest.mark.asyncio
    async def test_update_other_users_video_returns_none(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        video = await make_video(test_user, title="Original")

        result = await update_video(
            db_session, video.id, other_user.id, VideoUpdate(id=video.id, title="Hijacked")
        )

        assert result is None
        await db_session.refresh(video)
        assert video.title == "Original"

    @pytest.mark.asyncio
    async def test_delete_is_owner_filtered(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        video = await make_video(test_user)

        assert await delete_video(db_session, video.id, other_user.id) is None
        assert await get_user_video(db_session, video.id, test_user.id) is not None

        assert await delete_video(db_session, video.id, test_user.id) is not None
        assert await get_video(db_session, video.id) is None

    @pytest.mark.asyncio
    async def test_update_by_upload_id(self, db_session: AsyncSession, test_user: User):
        video = await create_video(db_session, test_user.id, "upload_abc")

        count = await update_video_by_upload_id(
            db_session, "upload_abc", mux_status="ready", duration=12500
        )

        assert count == 1
        await db_session.refresh(video)
        assert video.mux_status == "ready"
        assert video.duration == 12500


class TestVideoListings:
    """Feed and studio listings."""

    @pytest.mark.asyncio
    async def test_feed_shows_public_videos_only(
        self, db_session: AsyncSession, test_user: User, make_video
    ):
        public = await make_video(test_user, title="Public")
        await make_video(test_user, title="Private", visibility=VideoVisibility.PRIVATE)

        items, next_cursor, total = await list_videos(db_session, limit=10)

        assert [item.id for item in items] == [public.id]
        assert next_cursor is None
        assert total == 1

    @pytest.mark.asyncio
    async def test_studio_includes_private_videos_of_owner(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        await make_video(test_user, title="Public")
        await make_video(test_user, title="Private", visibility=VideoVisibility.PRIVATE)
        await make_video(other_user, title="Someone else")

        items, _, total = await list_user_videos(db_session, test_user.id, limit=10)

        assert total == 2
        assert {item.title for item in items} == {"Public", "Private"}

    @pytest.mark.asyncio
    async def test_list_items_carry_counts(
        self, db_session: AsyncSession, test_user: User, other_user: User, make_video
    ):
        video = await make_video(test_user)
        await record_view(db_session, other_user.id, video.id)
        await toggle_reaction(db_session, VideoReaction, other_user.id, video.id, ReactionType.LIKE)

        items, _, _ = await list_videos(db_session, limit=10)

        assert items[0].view_count == 1
        assert items[0].like_count == 1
        assert items[0].dislike_count == 0
        assert items[0].user.id == test_user.id
