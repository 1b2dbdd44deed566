"""Subscription model."""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from newtube.models.base import Base, TimestampMixin


class Subscription(Base, TimestampMixin):
    """Directed edge: ``viewer`` follows ``creator``."""

    __tablename__ = "subscriptions"

    viewer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    creator_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    __table_args__ = (CheckConstraint("viewer_id <> creator_id", name="ck_subscription_not_self"),)
