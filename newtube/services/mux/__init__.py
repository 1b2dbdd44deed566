"""Media pipeline (Mux) integration."""

from newtube.services.mux.client import (
    MuxClient,
    MuxUpload,
    mux_client,
    preview_url,
    thumbnail_url,
)
from newtube.services.mux.models import MuxAsset, MuxTrack, MuxWebhookEvent

__all__ = [
    "MuxAsset",
    "MuxClient",
    "MuxTrack",
    "MuxUpload",
    "MuxWebhookEvent",
    "mux_client",
    "preview_url",
    "thumbnail_url",
]
