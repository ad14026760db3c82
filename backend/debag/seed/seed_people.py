# seed/seed_people.py
"""
Roster seed - three sample DeBag people.

Skipped entirely when the people table already holds anyone, so it is safe
to run after every migration.

Usage :
    python -m debag.seed.seed_people
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from debag.core.config import settings
from debag.core.database import AsyncSessionLocal, dispose_engine
from debag.core.logging_config import setup_logging
from debag.shared.models import Person
from debag.modules.people.repository import PeopleRepository

logger = logging.getLogger(__name__)

repo = PeopleRepository()

SAMPLE_PEOPLE = [
    {"name": "Alex Carter",  "employee_code": "DB001"},
    {"name": "Jordan Lee",   "employee_code": "DB002"},
    {"name": "Taylor Reed",  "employee_code": "DB003"},
]


async def seed(db: AsyncSession) -> int:
    """Returns the number of people inserted (0 when skipped)."""
    if await repo.count(db) > 0:
        logger.info("Seed skipped: people already exist.")
        return 0

    db.add_all([Person(**row) for row in SAMPLE_PEOPLE])
    await db.commit()
    logger.info("Seeded %d people.", len(SAMPLE_PEOPLE))
    return len(SAMPLE_PEOPLE)


async def main():
    setup_logging(settings.LOG_LEVEL, json_output=False)
    try:
        async with AsyncSessionLocal() as db:
            await seed(db)
    finally:
        await dispose_engine()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
