"""Mux Video API client.

Only upload creation is called from here. Asset state changes arrive as
signed webhooks handled in ``newtube.api.webhooks.videos``.
"""

from dataclasses import dataclass

import httpx

from newtube.config import get_settings
from newtube.constants import MUX_API_URL, MUX_IMAGE_URL
from newtube.errors import UpstreamServiceError
from newtube.utils.http_client import get_general_client
from newtube.utils.logging import get_logger
from newtube.utils.retry import retry_async

logger = get_logger(__name__)


@dataclass(frozen=True)
class MuxUpload:
    """Direct upload target returned by Mux."""

    id: str
    url: str


def thumbnail_url(playback_id: str) -> str:
    return f"{MUX_IMAGE_URL}/{playback_id}/thumbnail.png"


def preview_url(playback_id: str) -> str:
    return f"{MUX_IMAGE_URL}/{playback_id}/animated.gif"


class MuxClient:
    """Client for the Mux Video API."""

    def __init__(self, base_url: str = MUX_API_URL) -> None:
        self.base_url = base_url
        self.settings = get_settings()

    def _auth(self) -> httpx.BasicAuth:
        if not self.settings.mux_token_id or not self.settings.mux_token_secret:
            raise UpstreamServiceError("mux", "MUX_TOKEN_ID/MUX_TOKEN_SECRET not configured")
        return httpx.BasicAuth(self.settings.mux_token_id, self.settings.mux_token_secret)

    async def create_upload(self, passthrough: str) -> MuxUpload:
        """Create a direct upload URL for a new asset.

        Args:
            passthrough: Opaque value echoed back on asset webhooks (the owner id)

        Raises:
            UpstreamServiceError: If Mux rejects the request or is unreachable
        """
        payload = {
            "new_asset_settings": {
                "passthrough": passthrough,
                "playback_policy": ["public"],
                "input": [
                    {
                        "generated_subtitles": [
                            {"language_code": "en", "name": "English"},
                        ]
                    }
                ],
            },
            "cors_origin": self.settings.app_url,
        }

        client = get_general_client()
        response = await retry_async(
            client.post,
            f"{self.base_url}/video/v1/uploads",
            json=payload,
            auth=self._auth(),
            operation_name="mux.create_upload",
        )
        if response.status_code >= 400:
            logger.error(f"Mux upload creation failed: {response.status_code} {response.text}")
            raise UpstreamServiceError("mux", f"upload creation failed ({response.status_code})")

        data = response.json()["data"]
        return MuxUpload(id=data["id"], url=data["url"])


mux_client = MuxClient()
