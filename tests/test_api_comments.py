"""Tests for comment and comment reaction procedures."""

import uuid

import pytest
from httpx import AsyncClient

from newtube.models import User, VideoVisibility


class TestComments:
    """Tests for comments.*"""

    @pytest.mark.asyncio
    async def test_create_and_list(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "First!"}
        )
        assert response.status_code == 200
        comment = response.json()
        assert comment["value"] == "First!"
        assert comment["user_id"] == str(test_user.id)

        response = await authenticated_client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id)}
        )
        data = response.json()
        assert data["total_count"] == 1
        assert data["next_cursor"] is None
        assert data["items"][0]["id"] == comment["id"]
        assert data["items"][0]["user"]["name"] == "Test User"

    @pytest.mark.asyncio
    async def test_create_on_missing_video(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(uuid.uuid4()), "value": "Hi"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_on_private_video_of_other_user(
        self, authenticated_client: AsyncClient, other_user: User, make_video
    ):
        video = await make_video(other_user, visibility=VideoVisibility.PRIVATE)

        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "Hi"}
        )

        assert response.status_code == 200
        assert response.json()["video_id"] == str(video.id)

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": ""}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_is_anonymous_and_paginated(
        self, authenticated_client: AsyncClient, client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)
        for n in range(3):
            await authenticated_client.post(
                "/api/trpc/comments.create", json={"video_id": str(video.id), "value": f"#{n}"}
            )

        response = await client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id), "limit": 2}
        )
        first = response.json()
        assert [item["value"] for item in first["items"]] == ["#2", "#1"]
        assert first["total_count"] == 3

        response = await client.post(
            "/api/trpc/comments.getMany",
            json={"video_id": str(video.id), "limit": 2, "cursor": first["next_cursor"]},
        )
        second = response.json()
        assert [item["value"] for item in second["items"]] == ["#0"]
        assert second["next_cursor"] is None

    @pytest.mark.asyncio
    async def test_list_invalid_cursor(self, client: AsyncClient, test_user: User, make_video):
        video = await make_video(test_user)

        response = await client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id), "cursor": "%%%"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_is_author_only(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        test_user: User,
        make_video,
    ):
        video = await make_video(test_user)
        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "Mine"}
        )
        comment_id = response.json()["id"]

        response = await other_client.post("/api/trpc/comments.remove", json={"id": comment_id})
        assert response.status_code == 404

        response = await authenticated_client.post(
            "/api/trpc/comments.remove", json={"id": comment_id}
        )
        assert response.status_code == 200


class TestCommentReactions:
    """Tests for commentReactions.*"""

    @pytest.mark.asyncio
    async def test_like_toggle_shows_in_listing(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        test_user: User,
        make_video,
    ):
        video = await make_video(test_user)
        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "Rate me"}
        )
        comment_id = response.json()["id"]

        response = await other_client.post(
            "/api/trpc/commentReactions.like", json={"comment_id": comment_id}
        )
        assert response.json() == {"target_id": comment_id, "type": "like"}

        response = await other_client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id)}
        )
        item = response.json()["items"][0]
        assert item["like_count"] == 1
        assert item["viewer_reaction"] == "like"

        response = await authenticated_client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id)}
        )
        assert response.json()["items"][0]["viewer_reaction"] is None

        response = await other_client.post(
            "/api/trpc/commentReactions.dislike", json={"comment_id": comment_id}
        )
        assert response.json()["type"] == "dislike"

        response = await other_client.post(
            "/api/trpc/comments.getMany", json={"video_id": str(video.id)}
        )
        item = response.json()["items"][0]
        assert item["like_count"] == 0
        assert item["dislike_count"] == 1

    @pytest.mark.asyncio
    async def test_react_to_missing_comment(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/trpc/commentReactions.like", json={"comment_id": str(uuid.uuid4())}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_react_to_comment_on_private_video_of_other_user(
        self,
        authenticated_client: AsyncClient,
        other_client: AsyncClient,
        other_user: User,
        make_video,
    ):
        video = await make_video(other_user, visibility=VideoVisibility.PRIVATE)
        response = await other_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "Mine"}
        )
        comment_id = response.json()["id"]

        comment_like = await authenticated_client.post(
            "/api/trpc/commentReactions.like", json={"comment_id": comment_id}
        )
        video_like = await authenticated_client.post(
            "/api/trpc/videoReactions.like", json={"video_id": str(video.id)}
        )

        assert comment_like.status_code == video_like.status_code == 200
        assert comment_like.json() == {"target_id": comment_id, "type": "like"}

    @pytest.mark.asyncio
    async def test_react_to_comment_of_deleted_video(
        self,
        authenticated_client: AsyncClient,
        test_user: User,
        make_video,
    ):
        video = await make_video(test_user)
        response = await authenticated_client.post(
            "/api/trpc/comments.create", json={"video_id": str(video.id), "value": "Gone soon"}
        )
        comment_id = response.json()["id"]
        await authenticated_client.post("/api/trpc/videos.remove", json={"id": str(video.id)})

        response = await authenticated_client.post(
            "/api/trpc/commentReactions.like", json={"comment_id": comment_id}
        )

        assert response.status_code == 404
