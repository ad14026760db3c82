# modules/people/service.py
"""
Roster orchestration - quick-add and active listing.
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from debag.modules.people.repository import PeopleRepository
from debag.modules.people.schemas import PersonCreateIn
from debag.shared.models import Person

logger = logging.getLogger(__name__)

repo = PeopleRepository()

EMPLOYEE_CODE_EXISTS = "EMPLOYEE_CODE_EXISTS"


class PeopleService:

    async def list_active(self, db: AsyncSession) -> List[Person]:
        return await repo.list_active(db)

    async def create(self, db: AsyncSession, payload: PersonCreateIn) -> Person:
        """
        Raises ValueError(EMPLOYEE_CODE_EXISTS) on a duplicate employee code,
        as classified by the store.
        """
        person = await repo.create(
            db,
            name=payload.name,
            employee_code=payload.employee_code,
            active=payload.active,
        )
        if person is None:
            logger.warning(
                "Duplicate employee code rejected: %s", payload.employee_code,
            )
            raise ValueError(EMPLOYEE_CODE_EXISTS)

        logger.info("Person created", extra={"person_id": person.id})
        return person
