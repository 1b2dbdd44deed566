"""Category procedures."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.constants import CACHE_TTL_CATEGORIES
from newtube.db import get_db
from newtube.db.crud import list_categories
from newtube.models.schemas import CategoryRead
from newtube.utils.cache import cache
from newtube.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

CATEGORIES_CACHE_KEY = "categories:all"


@router.post("/categories.getMany", response_model=list[CategoryRead])
async def get_many_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[CategoryRead]:
    """List all categories."""
    cached = await cache.get(CATEGORIES_CACHE_KEY)
    if cached is not None:
        return [CategoryRead.model_validate(item) for item in cached]

    logger.debug("Categories cache miss, reading from database")
    categories = [CategoryRead.model_validate(c) for c in await list_categories(db)]
    await cache.set(
        CATEGORIES_CACHE_KEY,
        [c.model_dump(mode="json") for c in categories],
        ttl=timedelta(seconds=CACHE_TTL_CATEGORIES),
    )
    return categories
