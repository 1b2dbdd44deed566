"""Subscription procedures."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.auth import ActorContext
from newtube.db import get_db
from newtube.db.crud import create_subscription, delete_subscription, get_user
from newtube.errors import BadRequest, NotFound
from newtube.models.schemas import SubscriptionInput, SubscriptionKey, SubscriptionRead
from newtube.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/subscriptions.create", response_model=SubscriptionRead)
async def create_subscription_procedure(
    data: SubscriptionInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SubscriptionRead:
    """Subscribe the actor to a creator."""
    if data.user_id == ctx.actor_id:
        raise BadRequest("Cannot subscribe to yourself")
    if not await get_user(db, data.user_id):
        raise NotFound("User not found")

    subscription = await create_subscription(db, ctx.actor_id, data.user_id)
    ctx.log(logger).info(f"Subscribed to {data.user_id}")
    return SubscriptionRead.model_validate(subscription)


@router.post("/subscriptions.remove", response_model=SubscriptionKey)
async def remove_subscription_procedure(
    data: SubscriptionInput,
    ctx: ActorContext,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SubscriptionKey:
    """Unsubscribe the actor from a creator."""
    if data.user_id == ctx.actor_id:
        raise BadRequest("Cannot unsubscribe from yourself")
    if not await delete_subscription(db, ctx.actor_id, data.user_id):
        raise NotFound("Subscription not found")

    ctx.log(logger).info(f"Unsubscribed from {data.user_id}")
    return SubscriptionKey(viewer_id=ctx.actor_id, creator_id=data.user_id)
