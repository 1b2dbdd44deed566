"""Identity webhook payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ClerkUserData(BaseModel):
    """User object carried by ``user.*`` events."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else "Anonymous"


class ClerkWebhookEvent(BaseModel):
    """Envelope of an identity webhook."""

    model_config = ConfigDict(extra="ignore")

    type: str
    data: dict[str, Any]
