"""
Gebeta Backend: Sample Data Seeder
==================================

What:  Replaces the catalogue with four sample campus businesses.
How:   Creates missing tables, deletes every business together with its menu
       items and reviews, then inserts SEED_DATA with generated slugs, all in
       one transaction.

Usage:
    python -m app.seed          (from backend/)
    gebeta-seed                 (installed console script)
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import dispose_engine, init_models, session_scope
from app.models.application import Application
from app.models.business import Business
from app.models.menu_item import MenuItem
from app.models.review import Review
from app.services.business_service import create_slug

logger = logging.getLogger(__name__)

SEED_DATA: List[Dict[str, Any]] = [
    {
        "name": "Student Center Cafeteria",
        "category": "on-campus",
        "location": {"address": "Main Campus, Building A"},
        "description": "The heart of campus dining.",
        "rating_average": 3.5,
        "rating_count": 150,
        "is_featured": True,
    },
    {
        "name": "Burger Dash",
        "category": "delivery",
        "location": {"address": "Off-campus HQ"},
        "description": "Fastest delivery to all dorms.",
        "rating_average": 4.8,
        "rating_count": 500,
        "is_featured": True,
    },
    {
        "name": "Green Garden",
        "category": "off-campus",
        "location": {"address": "South Gate"},
        "description": "Vegetarian friendly spot.",
        "rating_average": 4.2,
        "rating_count": 85,
        "is_featured": False,
    },
    {
        "name": "Night Owl Pizza",
        "category": "delivery",
        "location": {"address": "Downtown"},
        "description": "Open until 3 AM.",
        "rating_average": 3.9,
        "rating_count": 210,
        "is_featured": False,
    },
]


async def seed_businesses(db: AsyncSession) -> List[Business]:
    """Clear the catalogue and insert SEED_DATA. The caller owns the transaction."""
    await db.execute(update(Application).values(business_id=None))
    await db.execute(delete(MenuItem))
    await db.execute(delete(Review))
    await db.execute(delete(Business))
    logger.info("Cleared old businesses")

    businesses = [Business(slug=create_slug(entry["name"]), **entry) for entry in SEED_DATA]
    db.add_all(businesses)
    await db.flush()
    logger.info("Inserted %d businesses", len(businesses))
    return businesses


async def run_seed() -> None:
    await init_models()
    try:
        async with session_scope() as db:
            await seed_businesses(db)
    finally:
        await dispose_engine()


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    try:
        asyncio.run(run_seed())
    except Exception:
        logger.exception("Seeding failed")
        return 1
    logger.info("Database seeded successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
