"""Media pipeline webhook: mirrors asset state onto videos."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.config import get_settings
from newtube.db import get_db
from newtube.db.crud import (
    delete_video_by_upload_id,
    update_video_by_asset_id,
    update_video_by_upload_id,
)
from newtube.errors import InternalError, UpstreamServiceError
from newtube.services.mux import MuxAsset, MuxTrack, MuxWebhookEvent, preview_url, thumbnail_url
from newtube.services.storage import storage_client
from newtube.utils.logging import get_logger
from newtube.utils.signatures import WebhookVerificationError, verify_mux

router = APIRouter()
logger = get_logger(__name__)


def _bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=400)


async def _asset_created(db: AsyncSession, asset: MuxAsset) -> PlainTextResponse | None:
    if not asset.upload_id:
        return _bad_request("No upload ID found")
    await update_video_by_upload_id(
        db, asset.upload_id, mux_asset_id=asset.id, mux_status=asset.status
    )
    return None


async def _asset_ready(db: AsyncSession, asset: MuxAsset) -> PlainTextResponse | None:
    """Copy the generated images into storage and publish playback info."""
    playback_id = asset.playback_id
    if not playback_id:
        return _bad_request("Missing playback ID")
    if not asset.upload_id:
        return _bad_request("Missing upload ID")

    try:
        thumbnail, preview = await asyncio.gather(
            storage_client.upload_from_url(thumbnail_url(playback_id)),
            storage_client.upload_from_url(preview_url(playback_id)),
        )
    except UpstreamServiceError as e:
        logger.error(f"Could not store images for asset {asset.id}: {e}")
        return PlainTextResponse("Failed to upload thumbnail or preview", status_code=500)

    duration = round(asset.duration * 1000) if asset.duration else 0
    await update_video_by_upload_id(
        db,
        asset.upload_id,
        mux_status=asset.status,
        mux_playback_id=playback_id,
        mux_asset_id=asset.id,
        thumbnail_url=thumbnail.url,
        thumbnail_key=thumbnail.key,
        preview_url=preview.url,
        preview_key=preview.key,
        duration=duration,
    )
    return None


async def _asset_errored(db: AsyncSession, asset: MuxAsset) -> PlainTextResponse | None:
    if not asset.upload_id:
        return _bad_request("Missing upload ID")
    await update_video_by_upload_id(db, asset.upload_id, mux_status=asset.status)
    return None


async def _asset_deleted(db: AsyncSession, asset: MuxAsset) -> PlainTextResponse | None:
    if not asset.upload_id:
        return _bad_request("Missing upload ID")
    await delete_video_by_upload_id(db, asset.upload_id)
    return None


async def _track_ready(db: AsyncSession, track: MuxTrack) -> PlainTextResponse | None:
    if not track.asset_id:
        return _bad_request("Missing asset ID")
    await update_video_by_asset_id(
        db, track.asset_id, mux_track_id=track.id, mux_track_status=track.status
    )
    return None


ASSET_HANDLERS = {
    "video.asset.created": _asset_created,
    "video.asset.ready": _asset_ready,
    "video.asset.errored": _asset_errored,
    "video.asset.deleted": _asset_deleted,
}


@router.post("/videos/webhook", response_class=PlainTextResponse)
async def videos_webhook(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlainTextResponse:
    """Handle ``video.asset.*`` events.

    Events are applied by upload id (or asset id for tracks), so a
    redelivered event rewrites the same values.
    """
    secret = get_settings().mux_webhook_secret
    if not secret:
        logger.error("MUX_WEBHOOK_SECRET not configured")
        raise InternalError("Webhook signing secret not configured")

    signature = request.headers.get("mux-signature")
    if not signature:
        return PlainTextResponse("No signature found", status_code=401)

    body = await request.body()
    try:
        verify_mux(secret, body, signature)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected media webhook: {e}")
        return PlainTextResponse("Invalid signature", status_code=401)

    try:
        event = MuxWebhookEvent.model_validate_json(body)
        if event.type == "video.asset.track.ready":
            error = await _track_ready(db, MuxTrack.model_validate(event.data))
        elif event.type in ASSET_HANDLERS:
            error = await ASSET_HANDLERS[event.type](db, MuxAsset.model_validate(event.data))
        else:
            logger.debug(f"Ignoring media event {event.type}")
            error = None
    except ValidationError:
        return _bad_request("Invalid payload")

    if error is not None:
        return error
    logger.info(f"Processed media event {event.type}")
    return PlainTextResponse("Webhook received", status_code=200)
