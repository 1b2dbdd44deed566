"""Object storage client for thumbnails and previews.

The storage service accepts multipart uploads at ``POST /files`` and
URL imports at ``POST /files/from-url``, both answering ``{"key", "url"}``,
and deletes by key at ``POST /files/delete``.
"""

from dataclasses import dataclass

from newtube.config import get_settings
from newtube.errors import UpstreamServiceError
from newtube.utils.http_client import get_upload_client
from newtube.utils.logging import get_logger
from newtube.utils.retry import retry_async

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """File held by the storage service."""

    key: str
    url: str


class StorageClient:
    """Client for the object storage HTTP API."""

    def __init__(self) -> None:
        self.settings = get_settings()

    @property
    def _headers(self) -> dict[str, str]:
        if not self.settings.storage_api_key:
            raise UpstreamServiceError("storage", "STORAGE_API_KEY not configured")
        return {"x-api-key": self.settings.storage_api_key}

    def _url(self, path: str) -> str:
        return f"{self.settings.storage_api_url.rstrip('/')}{path}"

    @staticmethod
    def _parse(response, operation: str) -> StoredFile:
        if response.status_code >= 400:
            logger.error(f"Storage {operation} failed: {response.status_code} {response.text}")
            raise UpstreamServiceError("storage", f"{operation} failed ({response.status_code})")
        data = response.json()
        return StoredFile(key=data["key"], url=data["url"])

    async def upload_from_url(self, url: str) -> StoredFile:
        """Copy a remote file into storage."""
        client = get_upload_client()
        response = await retry_async(
            client.post,
            self._url("/files/from-url"),
            json={"url": url},
            headers=self._headers,
            operation_name="storage.upload_from_url",
        )
        return self._parse(response, "upload_from_url")

    async def upload_file(self, filename: str, content: bytes, content_type: str) -> StoredFile:
        """Upload file bytes received from a client."""
        client = get_upload_client()
        response = await retry_async(
            client.post,
            self._url("/files"),
            files={"file": (filename, content, content_type)},
            headers=self._headers,
            operation_name="storage.upload_file",
        )
        return self._parse(response, "upload_file")

    async def delete_files(self, keys: str | list[str]) -> None:
        """Delete stored files by key."""
        if isinstance(keys, str):
            keys = [keys]

        client = get_upload_client()
        response = await retry_async(
            client.post,
            self._url("/files/delete"),
            json={"keys": keys},
            headers=self._headers,
            operation_name="storage.delete_files",
        )
        if response.status_code >= 400:
            logger.error(f"Storage delete failed: {response.status_code} {response.text}")
            raise UpstreamServiceError("storage", f"delete failed ({response.status_code})")


storage_client = StorageClient()
