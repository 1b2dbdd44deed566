"""Mux webhook payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class MuxWebhookEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    data: dict[str, Any]


class MuxPlaybackId(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    policy: str | None = None


class MuxAsset(BaseModel):
    """Asset object carried by ``video.asset.*`` events."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    status: str | None = None
    upload_id: str | None = None
    playback_ids: list[MuxPlaybackId] = []
    duration: float | None = None  # seconds

    @property
    def playback_id(self) -> str | None:
        return self.playback_ids[0].id if self.playback_ids else None


class MuxTrack(BaseModel):
    """Track object carried by ``video.asset.track.*`` events."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    status: str | None = None
    asset_id: str | None = None
