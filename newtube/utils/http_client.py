"""Shared persistent httpx clients for external service calls.

Using persistent clients avoids creating a new TCP connection + TLS handshake
for every API call, improving performance through connection reuse and pooling.
"""

import httpx

from newtube.constants import API_TIMEOUT_EXTERNAL, API_TIMEOUT_UPLOAD

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

_general_client: httpx.AsyncClient | None = None
_upload_client: httpx.AsyncClient | None = None


def get_general_client() -> httpx.AsyncClient:
    """Get persistent httpx client for JSON API calls (Mux, workflow runner)."""
    global _general_client
    if _general_client is None:
        _general_client = httpx.AsyncClient(
            timeout=API_TIMEOUT_EXTERNAL,
            limits=_POOL_LIMITS,
        )
    return _general_client


def get_upload_client() -> httpx.AsyncClient:
    """Get persistent httpx client for file transfers (object storage)."""
    global _upload_client
    if _upload_client is None:
        _upload_client = httpx.AsyncClient(
            timeout=API_TIMEOUT_UPLOAD,
            limits=_POOL_LIMITS,
            follow_redirects=True,
        )
    return _upload_client


async def close_all_clients() -> None:
    """Close all persistent httpx clients. Call during app shutdown."""
    global _general_client, _upload_client
    if _general_client is not None:
        await _general_client.aclose()
        _general_client = None
    if _upload_client is not None:
        await _upload_client.aclose()
        _upload_client = None
