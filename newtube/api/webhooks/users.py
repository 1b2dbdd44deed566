"""Identity provider webhook: mirrors users into the local store."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.auth.models import ClerkUserData, ClerkWebhookEvent
from newtube.config import get_settings
from newtube.db import get_db
from newtube.db.crud import delete_user_by_clerk_id, upsert_user
from newtube.errors import InternalError
from newtube.utils.logging import get_logger
from newtube.utils.signatures import WebhookVerificationError, verify_svix

router = APIRouter()
logger = get_logger(__name__)


@router.post("/users/webhook", response_class=PlainTextResponse)
async def users_webhook(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlainTextResponse:
    """Handle ``user.created``, ``user.updated`` and ``user.deleted``.

    Redelivered events are harmless: users are upserted by external id and
    deleting a missing user does nothing.
    """
    secret = get_settings().clerk_signing_secret
    if not secret:
        logger.error("CLERK_SIGNING_SECRET not configured")
        raise InternalError("Webhook signing secret not configured")

    svix_id = request.headers.get("svix-id")
    svix_timestamp = request.headers.get("svix-timestamp")
    svix_signature = request.headers.get("svix-signature")
    if not svix_id or not svix_timestamp or not svix_signature:
        return PlainTextResponse("Error: Missing Svix headers", status_code=400)

    body = await request.body()
    try:
        verify_svix(secret, body, svix_id, svix_timestamp, svix_signature)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected identity webhook {svix_id}: {e}")
        return PlainTextResponse("Error: Verification error", status_code=400)

    try:
        event = ClerkWebhookEvent.model_validate_json(body)
        user = ClerkUserData.model_validate(event.data)
    except ValidationError:
        return PlainTextResponse("Error: Invalid payload", status_code=400)

    if event.type in ("user.created", "user.updated"):
        if not user.id:
            return PlainTextResponse("Missing user id", status_code=400)
        await upsert_user(db, user.id, user.full_name, user.image_url or "")
        logger.info(f"Synced user {user.id} ({event.type})")
    elif event.type == "user.deleted":
        if not user.id:
            return PlainTextResponse("Missing user id", status_code=400)
        deleted = await delete_user_by_clerk_id(db, user.id)
        logger.info(f"Deleted user {user.id}" if deleted else f"User {user.id} already gone")
    else:
        logger.debug(f"Ignoring identity event {event.type}")

    return PlainTextResponse("Webhook received", status_code=200)
