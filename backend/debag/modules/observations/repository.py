# modules/observations/repository.py
"""
DB access for observations.

Every read eager-loads the person (joinedload) and orders by created_at
DESC, so the engine never triggers a lazy load outside the session.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload
from sqlalchemy import select, delete
from typing import List, Optional
from datetime import datetime

from debag.shared.models import Observation


class ObservationRepository:

    def _base_query(self):
        return (
            select(Observation)
            .options(joinedload(Observation.person))
            .order_by(Observation.created_at.desc(), Observation.id.desc())
        )

    async def get(self, db: AsyncSession, observation_id: int) -> Optional[Observation]:
        r = await db.execute(
            self._base_query().where(Observation.id == observation_id)
        )
        return r.scalar_one_or_none()

    async def list_filtered(
        self,
        db: AsyncSession,
        role=None,
        belt=None,
        shift_window=None,
        flow_condition=None,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        limit: int = 50,
    ) -> List[Observation]:
        q = self._base_query()
        if role is not None:
            q = q.where(Observation.role == role)
        if belt is not None:
            q = q.where(Observation.belt == belt)
        if shift_window is not None:
            q = q.where(Observation.shift_window == shift_window)
        if flow_condition is not None:
            q = q.where(Observation.flow_condition == flow_condition)
        if start_at is not None and end_at is not None:
            q = q.where(Observation.created_at >= start_at, Observation.created_at <= end_at)
        r = await db.execute(q.limit(limit))
        return r.scalars().all()

    async def list_in_range(
        self, db: AsyncSession, start_at: datetime, end_at: datetime
    ) -> List[Observation]:
        """Unbounded by count - bounded only by the date range."""
        r = await db.execute(
            self._base_query().where(
                Observation.created_at >= start_at,
                Observation.created_at <= end_at,
            )
        )
        return r.scalars().all()

    async def create(self, db: AsyncSession, **values) -> Optional[Observation]:
        """Returns None when the person reference is rejected by the store."""
        db_obj = Observation(**values)
        try:
            db.add(db_obj)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            return None
        return await self.get(db, db_obj.id)

    async def delete(self, db: AsyncSession, observation_id: int) -> bool:
        r = await db.execute(
            delete(Observation).where(Observation.id == observation_id)
        )
        await db.commit()
        return r.rowcount > 0
