"""User model."""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from newtube.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Account mirrored from the identity provider.

    Rows are created, updated and deleted by identity webhooks only.
    Deleting a user cascades to everything it owns.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    clerk_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    image_url: Mapped[str] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
