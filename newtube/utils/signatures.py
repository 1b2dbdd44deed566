"""Webhook signature verification.

Identity events are signed with the Svix scheme, media pipeline events with
the Mux scheme. Both are HMAC-SHA256 over the raw body plus a timestamp,
checked against a clock-skew tolerance to reject replays.
"""

import base64
import hashlib
import hmac
import time

from newtube.constants import WEBHOOK_TOLERANCE_SECONDS


class WebhookVerificationError(Exception):
    """Signature missing, malformed, expired or not matching."""


def _check_timestamp(timestamp: str, tolerance: int, now: float | None) -> None:
    try:
        ts = int(timestamp)
    except ValueError as e:
        raise WebhookVerificationError("Invalid timestamp") from e

    now = now if now is not None else time.time()
    if abs(now - ts) > tolerance:
        raise WebhookVerificationError("Timestamp outside tolerance")


def _svix_secret_bytes(secret: str) -> bytes:
    if secret.startswith("whsec_"):
        secret = secret[len("whsec_"):]
    try:
        return base64.b64decode(secret)
    except ValueError as e:
        raise WebhookVerificationError("Invalid signing secret") from e


def sign_svix(secret: str, msg_id: str, timestamp: str, body: bytes) -> str:
    """Compute the ``v1,<base64>`` signature for a Svix message."""
    signed = f"{msg_id}.{timestamp}.".encode() + body
    digest = hmac.new(_svix_secret_bytes(secret), signed, hashlib.sha256).digest()
    return "v1," + base64.b64encode(digest).decode()


def verify_svix(
    secret: str,
    body: bytes,
    msg_id: str,
    timestamp: str,
    signature_header: str,
    tolerance: int = WEBHOOK_TOLERANCE_SECONDS,
    now: float | None = None,
) -> None:
    """Verify a Svix-signed webhook.

    The signature header holds space-separated ``v1,<sig>`` entries; any
    one of them matching is enough.

    Raises:
        WebhookVerificationError: If the message cannot be trusted
    """
    _check_timestamp(timestamp, tolerance, now)
    expected = sign_svix(secret, msg_id, timestamp, body).split(",", 1)[1]

    for entry in signature_header.split(" "):
        version, _, candidate = entry.partition(",")
        if version == "v1" and hmac.compare_digest(expected, candidate):
            return

    raise WebhookVerificationError("No matching signature")


def sign_mux(secret: str, timestamp: str, body: bytes) -> str:
    """Compute the ``t=...,v1=...`` header value for a Mux event."""
    signed = f"{timestamp}.".encode() + body
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def verify_mux(
    secret: str,
    body: bytes,
    signature_header: str,
    tolerance: int = WEBHOOK_TOLERANCE_SECONDS,
    now: float | None = None,
) -> None:
    """Verify a Mux-signed webhook (``mux-signature: t=<ts>,v1=<hex>``).

    Raises:
        WebhookVerificationError: If the message cannot be trusted
    """
    parts: dict[str, list[str]] = {}
    for item in signature_header.split(","):
        key, _, value = item.strip().partition("=")
        parts.setdefault(key, []).append(value)

    timestamps = parts.get("t")
    signatures = parts.get("v1")
    if not timestamps or not signatures:
        raise WebhookVerificationError("Malformed signature header")

    timestamp = timestamps[0]
    _check_timestamp(timestamp, tolerance, now)
    expected = sign_mux(secret, timestamp, body).rsplit("v1=", 1)[1]

    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise WebhookVerificationError("No matching signature")
