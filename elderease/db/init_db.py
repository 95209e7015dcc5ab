"""
Catalog seeding.

Run directly to create tables and load the tutorial catalog:

    python -m elderease.db.init_db
"""

import asyncio
import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from elderease.db.database import AsyncSessionLocal, init_models
from elderease.db.seed_data import TUTORIALS
from elderease.repositories.tutorial_repo import TutorialRepository

logger = logging.getLogger(__name__)


async def seed_catalog(db: AsyncSession, tutorials: Iterable[dict] = TUTORIALS) -> int:
    """
    Insert seed tutorials that are not in the database yet.

    Existing tutorials are left untouched. Returns the number added.
    """
    repo = TutorialRepository(db)
    added = 0
    for data in tutorials:
        if await repo.add_tutorial(data):
            added += 1
            logger.info(f"Seeded tutorial {data['id']}: {data['title']}")
    await db.commit()
    return added


async def main() -> None:
    await init_models()
    async with AsyncSessionLocal() as db:
        added = await seed_catalog(db)
    logger.info(f"Catalog seed complete ({added} new tutorials)")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(main())
