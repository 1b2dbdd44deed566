"""CRUD operations for users mirrored from the identity provider."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.db.crud.upsert import dialect_insert
from newtube.models import User
from newtube.models.base import utcnow


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_clerk_id(db: AsyncSession, clerk_id: str) -> User | None:
    result = await db.execute(select(User).where(User.clerk_id == clerk_id))
    return result.scalar_one_or_none()


async def upsert_user(db: AsyncSession, clerk_id: str, name: str, image_url: str) -> User:
    """Create or refresh a user from an identity event.

    Keyed on ``clerk_id`` so redelivered events are harmless.
    """
    stmt = dialect_insert(db, User).values(
        id=uuid.uuid4(),
        clerk_id=clerk_id,
        name=name,
        image_url=image_url,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["clerk_id"],
        set_={"name": stmt.excluded.name, "image_url": stmt.excluded.image_url, "updated_at": utcnow()},
    )
    await db.execute(stmt)
    await db.commit()

    result = await db.execute(
        select(User)
        .where(User.clerk_id == clerk_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def delete_user_by_clerk_id(db: AsyncSession, clerk_id: str) -> bool:
    """Delete a user and, by cascade, everything the user owns."""
    result = await db.execute(delete(User).where(User.clerk_id == clerk_id))
    await db.commit()
    return result.rowcount > 0
