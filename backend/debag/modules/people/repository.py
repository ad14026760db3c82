# modules/people/repository.py
"""
DB access for the DeBag roster.

Uniqueness of employee_code is enforced by the store: create() does not
pre-check, it reads the IntegrityError.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from typing import List, Optional

from debag.shared.models import Person


class PeopleRepository:

    async def get(self, db: AsyncSession, person_id: int) -> Optional[Person]:
        r = await db.execute(select(Person).where(Person.id == person_id))
        return r.scalar_one_or_none()

    async def list_active(self, db: AsyncSession) -> List[Person]:
        r = await db.execute(
            select(Person)
            .where(Person.active == True)
            .order_by(Person.created_at.asc(), Person.id.asc())
        )
        return r.scalars().all()

    async def count(self, db: AsyncSession) -> int:
        r = await db.execute(select(func.count(Person.id)))
        return r.scalar_one()

    async def create(
        self,
        db: AsyncSession,
        name: Optional[str],
        employee_code: Optional[str],
        active: bool = True,
    ) -> Optional[Person]:
        """Returns None when employee_code already exists."""
        db_obj = Person(name=name, employee_code=employee_code, active=active)
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError:
            await db.rollback()
            return None
