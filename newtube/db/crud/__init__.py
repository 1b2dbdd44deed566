"""CRUD operations module."""

from newtube.db.crud.categories import get_or_create_category, list_categories
from newtube.db.crud.comments import create_comment, delete_comment, get_comment, list_comments
from newtube.db.crud.reactions import get_reaction, toggle_reaction
from newtube.db.crud.subscriptions import create_subscription, delete_subscription
from newtube.db.crud.users import (
    delete_user_by_clerk_id,
    get_user,
    get_user_by_clerk_id,
    upsert_user,
)
from newtube.db.crud.videos import (
    create_video,
    delete_video,
    delete_video_by_upload_id,
    get_user_video,
    get_video,
    get_video_detail,
    list_user_videos,
    list_videos,
    set_thumbnail,
    update_video,
    update_video_by_asset_id,
    update_video_by_upload_id,
)
from newtube.db.crud.views import record_view

__all__ = [
    "create_comment",
    "create_subscription",
    "create_video",
    "delete_comment",
    "delete_subscription",
    "delete_user_by_clerk_id",
    "delete_video",
    "delete_video_by_upload_id",
    "get_comment",
    "get_or_create_category",
    "get_reaction",
    "get_user",
    "get_user_by_clerk_id",
    "get_user_video",
    "get_video",
    "get_video_detail",
    "list_categories",
    "list_comments",
    "list_user_videos",
    "list_videos",
    "record_view",
    "set_thumbnail",
    "toggle_reaction",
    "update_video",
    "update_video_by_asset_id",
    "update_video_by_upload_id",
    "upsert_user",
]
