"""Main API router."""

from fastapi import APIRouter

from newtube.api.categories import router as categories_router
from newtube.api.comment_reactions import router as comment_reactions_router
from newtube.api.comments import router as comments_router
from newtube.api.studio import router as studio_router
from newtube.api.subscriptions import router as subscriptions_router
from newtube.api.video_reactions import router as video_reactions_router
from newtube.api.video_views import router as video_views_router
from newtube.api.videos import router as videos_router
from newtube.api.webhooks.users import router as users_webhook_router
from newtube.api.webhooks.videos import router as videos_webhook_router

# Procedures are addressed as /api/trpc/<router>.<procedure>
rpc_router = APIRouter(prefix="/trpc")

rpc_router.include_router(categories_router, tags=["categories"])
rpc_router.include_router(videos_router, tags=["videos"])
rpc_router.include_router(studio_router, tags=["studio"])
rpc_router.include_router(video_views_router, tags=["videoViews"])
rpc_router.include_router(video_reactions_router, tags=["videoReactions"])
rpc_router.include_router(comments_router, tags=["comments"])
rpc_router.include_router(comment_reactions_router, tags=["commentReactions"])
rpc_router.include_router(subscriptions_router, tags=["subscriptions"])

api_router = APIRouter(prefix="/api")

api_router.include_router(rpc_router)
api_router.include_router(users_webhook_router, tags=["webhooks"])
api_router.include_router(videos_webhook_router, tags=["webhooks"])
