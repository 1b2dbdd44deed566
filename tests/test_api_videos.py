"""Tests for video procedures."""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.errors import UpstreamServiceError
from newtube.models import User, VideoVisibility
from newtube.services.mux import MuxUpload, mux_client
from newtube.services.storage import StoredFile, storage_client
from newtube.services.workflow import workflow_client


class TestVideoCreate:
    """Tests for videos.create."""

    @pytest.mark.asyncio
    async def test_create_requires_actor(self, client: AsyncClient):
        response = await client.post("/api/trpc/videos.create", json={})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_create_returns_placeholder_and_upload_url(
        self, authenticated_client: AsyncClient, test_user: User
    ):
        upload = MuxUpload(id="upload_1", url="https://storage.mux.com/upload_1")
        with patch.object(mux_client, "create_upload", AsyncMock(return_value=upload)) as create:
            response = await authenticated_client.post("/api/trpc/videos.create", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == upload.url
        assert data["video"]["title"] == "Untitled"
        assert data["video"]["mux_status"] == "waiting"
        assert data["video"]["mux_upload_id"] == "upload_1"
        assert data["video"]["user_id"] == str(test_user.id)
        create.assert_awaited_once_with(passthrough=str(test_user.id))

    @pytest.mark.asyncio
    async def test_create_upstream_failure_is_internal_error(
        self, authenticated_client: AsyncClient
    ):
        failure = AsyncMock(side_effect=UpstreamServiceError("mux", "unreachable"))
        with patch.object(mux_client, "create_upload", failure):
            response = await authenticated_client.post("/api/trpc/videos.create", json={})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"


class TestVideoUpdateRemove:
    """Tests for videos.update and videos.remove."""

    @pytest.mark.asyncio
    async def test_update_own_video(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user, visibility=VideoVisibility.PRIVATE)

        response = await authenticated_client.post(
            "/api/trpc/videos.update",
            json={"id": str(video.id), "title": "Renamed", "visibility": "public"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Renamed"
        assert data["visibility"] == "public"

    @pytest.mark.asyncio
    async def test_update_without_id_is_bad_request(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/trpc/videos.update", json={"title": "No id"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_update_empty_title_is_bad_request(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.update", json={"id": str(video.id), "title": ""}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_other_users_video_is_not_found(
        self, authenticated_client: AsyncClient, other_user: User, make_video
    ):
        video = await make_video(other_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.update", json={"id": str(video.id), "title": "Mine now"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_remove_own_video(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.remove", json={"id": str(video.id)}
        )
        assert response.status_code == 200

        response = await authenticated_client.post(
            "/api/trpc/videos.getOne", json={"id": str(video.id)}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_other_users_video_is_not_found(
        self, authenticated_client: AsyncClient, other_user: User, make_video
    ):
        video = await make_video(other_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.remove", json={"id": str(video.id)}
        )

        assert response.status_code == 404


class TestVideoRead:
    """Tests for videos.getOne and videos.getMany."""

    @pytest.mark.asyncio
    async def test_get_one_anonymous(self, client: AsyncClient, test_user: User, make_video):
        video = await make_video(test_user, title="Hello")

        response = await client.post("/api/trpc/videos.getOne", json={"id": str(video.id)})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Hello"
        assert data["view_count"] == 0
        assert data["viewer_reaction"] is None
        assert data["user"]["id"] == str(test_user.id)
        assert data["user"]["viewer_subscribed"] is False

    @pytest.mark.asyncio
    async def test_get_one_default_private_video_anonymously(
        self, client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user, visibility=VideoVisibility.PRIVATE)

        response = await client.post("/api/trpc/videos.getOne", json={"id": str(video.id)})

        assert response.status_code == 200
        data = response.json()
        assert data["visibility"] == "private"
        assert data["view_count"] == 0

    @pytest.mark.asyncio
    async def test_get_one_unknown_id(self, client: AsyncClient):
        response = await client.post("/api/trpc/videos.getOne", json={"id": str(uuid.uuid4())})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_one_malformed_input(self, client: AsyncClient):
        response = await client.post("/api/trpc/videos.getOne", json={"id": "nope"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_get_many_pages(self, client: AsyncClient, test_user: User, make_video):
        for n in range(3):
            await make_video(test_user, title=f"Video {n}")

        response = await client.post("/api/trpc/videos.getMany", json={"limit": 2})
        assert response.status_code == 200
        first = response.json()
        assert len(first["items"]) == 2
        assert first["total_count"] == 3
        assert first["next_cursor"]

        response = await client.post(
            "/api/trpc/videos.getMany", json={"limit": 2, "cursor": first["next_cursor"]}
        )
        second = response.json()
        assert len(second["items"]) == 1
        assert second["next_cursor"] is None

        ids = [item["id"] for item in first["items"] + second["items"]]
        assert len(set(ids)) == 3

    @pytest.mark.asyncio
    async def test_get_many_filters_by_category(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        make_video,
    ):
        from newtube.db.crud import get_or_create_category

        music, _ = await get_or_create_category(db_session, "Music")
        await db_session.commit()
        tagged = await make_video(test_user, title="Song", category_id=music.id)
        await make_video(test_user, title="Untagged")

        response = await client.post(
            "/api/trpc/videos.getMany", json={"category_id": str(music.id)}
        )

        data = response.json()
        assert [item["id"] for item in data["items"]] == [str(tagged.id)]

    @pytest.mark.asyncio
    async def test_get_many_invalid_cursor(self, client: AsyncClient):
        response = await client.post("/api/trpc/videos.getMany", json={"cursor": "garbage"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_get_many_limit_bounds(self, client: AsyncClient):
        response = await client.post("/api/trpc/videos.getMany", json={"limit": 101})

        assert response.status_code == 400


class TestStudio:
    """Tests for studio procedures."""

    @pytest.mark.asyncio
    async def test_studio_lists_own_private_videos(
        self, authenticated_client: AsyncClient, test_user: User, other_user: User, make_video
    ):
        private = await make_video(test_user, visibility=VideoVisibility.PRIVATE)
        await make_video(other_user)

        response = await authenticated_client.post("/api/trpc/studio.getMany", json={})

        data = response.json()
        assert [item["id"] for item in data["items"]] == [str(private.id)]
        assert data["total_count"] == 1

    @pytest.mark.asyncio
    async def test_studio_get_one_other_users_video(
        self, authenticated_client: AsyncClient, other_user: User, make_video
    ):
        video = await make_video(other_user)

        response = await authenticated_client.post(
            "/api/trpc/studio.getOne", json={"id": str(video.id)}
        )

        assert response.status_code == 404


class TestThumbnails:
    """Tests for thumbnail procedures."""

    @pytest.mark.asyncio
    async def test_restore_without_playback_id(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.restoreThumbnail", json={"id": str(video.id)}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_restore_replaces_stored_thumbnail(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(
            test_user,
            mux_playback_id="play_1",
            thumbnail_url="https://files.example.com/old.png",
            thumbnail_key="old-key",
        )
        stored = StoredFile(key="new-key", url="https://files.example.com/new.png")

        with (
            patch.object(storage_client, "delete_files", AsyncMock()) as delete_files,
            patch.object(storage_client, "upload_from_url", AsyncMock(return_value=stored)) as upload,
        ):
            response = await authenticated_client.post(
                "/api/trpc/videos.restoreThumbnail", json={"id": str(video.id)}
            )

        assert response.status_code == 200
        assert response.json()["thumbnail_key"] == "new-key"
        delete_files.assert_awaited_once_with("old-key")
        upload.assert_awaited_once_with("https://image.mux.com/play_1/thumbnail.png")

    @pytest.mark.asyncio
    async def test_restore_upload_failure(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user, mux_playback_id="play_2")
        failure = AsyncMock(side_effect=UpstreamServiceError("storage", "down"))

        with patch.object(storage_client, "upload_from_url", failure):
            response = await authenticated_client.post(
                "/api/trpc/videos.restoreThumbnail", json={"id": str(video.id)}
            )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"

    @pytest.mark.asyncio
    async def test_upload_thumbnail(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)
        stored = StoredFile(key="custom-key", url="https://files.example.com/custom.png")

        with patch.object(storage_client, "upload_file", AsyncMock(return_value=stored)):
            response = await authenticated_client.post(
                "/api/trpc/videos.uploadThumbnail",
                data={"id": str(video.id)},
                files={"file": ("thumb.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
            )

        assert response.status_code == 200
        assert response.json()["thumbnail_url"] == stored.url

    @pytest.mark.asyncio
    async def test_upload_thumbnail_rejects_non_images(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.uploadThumbnail",
            data={"id": str(video.id)},
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400


class TestWorkflows:
    """Tests for AI generation triggers."""

    @pytest.mark.asyncio
    async def test_generate_title_enqueues_with_retries(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        with patch.object(workflow_client, "trigger", AsyncMock(return_value="wfr_1")) as trigger:
            response = await authenticated_client.post(
                "/api/trpc/videos.generateTitle", json={"id": str(video.id)}
            )

        assert response.status_code == 200
        assert response.json() == {"workflow_run_id": "wfr_1"}
        url, body = trigger.await_args.args
        assert url.endswith("/api/videos/workflows/title")
        assert body == {"userId": str(test_user.id), "videoId": str(video.id)}
        assert trigger.await_args.kwargs["retries"] == 3

    @pytest.mark.asyncio
    async def test_generate_thumbnail_prompt_too_short(
        self, authenticated_client: AsyncClient, test_user: User, make_video
    ):
        video = await make_video(test_user)

        response = await authenticated_client.post(
            "/api/trpc/videos.generateThumbnail", json={"id": str(video.id), "prompt": "cat"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_generate_for_other_users_video(
        self, authenticated_client: AsyncClient, other_user: User, make_video
    ):
        video = await make_video(other_user)

        with patch.object(workflow_client, "trigger", AsyncMock()) as trigger:
            response = await authenticated_client.post(
                "/api/trpc/videos.generateDescription", json={"id": str(video.id)}
            )

        assert response.status_code == 404
        trigger.assert_not_awaited()
