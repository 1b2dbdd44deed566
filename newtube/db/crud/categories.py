"""CRUD operations for categories."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.models import Category


async def list_categories(db: AsyncSession) -> Sequence[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


async def get_or_create_category(
    db: AsyncSession,
    name: str,
    description: str | None = None,
) -> tuple[Category, bool]:
    """Get existing category or create new one.

    Returns:
        Tuple of (category, created)
    """
    result = await db.execute(select(Category).where(Category.name == name))
    category = result.scalar_one_or_none()
    if category:
        return category, False

    category = Category(name=name, description=description)
    db.add(category)
    await db.flush()
    return category, True
