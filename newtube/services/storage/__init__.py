"""Object storage integration."""

from newtube.services.storage.client import StorageClient, StoredFile, storage_client

__all__ = ["StorageClient", "StoredFile", "storage_client"]
