#!/usr/bin/env python3
"""Seed the category reference data.

Existing categories are left untouched, so the script can be re-run.

Usage:
    python scripts/seed_categories.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from newtube.db import async_session_maker, init_db
from newtube.db.crud import get_or_create_category

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

CATEGORIES = [
    "Cars and vehicles",
    "Comedy",
    "Education",
    "Gaming",
    "Entertainment",
    "Film and animation",
    "How-to and style",
    "Music",
    "News and politics",
    "People and blogs",
    "Pets and animals",
    "Science and technology",
    "Sports",
    "Travel and events",
]


async def main() -> None:
    await init_db()

    created = 0
    async with async_session_maker() as db:
        for name in CATEGORIES:
            _, was_created = await get_or_create_category(
                db, name, description=f"Videos related to {name.lower()}"
            )
            if was_created:
                created += 1
                logger.info(f"  + {name}")
        await db.commit()

    logger.info(f"Seeded {created} new categories ({len(CATEGORIES) - created} already present)")


if __name__ == "__main__":
    asyncio.run(main())
