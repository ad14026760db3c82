# modules/observations/service.py
"""
Observation capture, listing, deletion and CSV export.

Rule: avg_seconds_per_bag is computed here, once, from the validated
payload. Nothing downstream recomputes it.
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Tuple

from debag.engine.export.csv_writer import render_observations, export_filename
from debag.engine.metrics.aggregation import seconds_per_bag
from debag.modules.observations.repository import ObservationRepository
from debag.modules.observations.schemas import ObservationCreateIn, ObservationFilters
from debag.modules.people.repository import PeopleRepository
from debag.shared.models import Observation
from debag.shared.validators import parse_date_range

logger = logging.getLogger(__name__)

repo = ObservationRepository()
people_repo = PeopleRepository()

PERSON_NOT_FOUND = "Person not found."
OBSERVATION_NOT_FOUND = "Observation not found."


class ObservationService:

    # ── Capture ───────────────────────────────────────────────

    async def create(self, db: AsyncSession, payload: ObservationCreateIn) -> Observation:
        if await people_repo.get(db, payload.person_id) is None:
            raise KeyError(PERSON_NOT_FOUND)

        observation = await repo.create(
            db,
            person_id=payload.person_id,
            role=payload.role,
            belt=payload.belt,
            shift_window=payload.shift_window,
            bags_timed=payload.bags_timed,
            total_seconds=payload.total_seconds,
            avg_seconds_per_bag=seconds_per_bag(payload.total_seconds, payload.bags_timed),
            flow_condition=payload.flow_condition,
            quality_issue=payload.quality_issue,
            safety_issue=payload.safety_issue,
            notes=payload.notes,
        )
        if observation is None:
            raise KeyError(PERSON_NOT_FOUND)

        logger.info(
            "Observation created",
            extra={"observation_id": observation.id, "person_id": observation.person_id},
        )
        return observation

    # ── Listing ───────────────────────────────────────────────

    async def list_observations(
        self, db: AsyncSession, filters: ObservationFilters
    ) -> List[Observation]:
        """
        Equality filters + optional date range + limit.
        The range only applies when both start and end are given; it is
        validated before the store is touched.
        """
        start_at = end_at = None
        if filters.start and filters.end:
            rng = parse_date_range(filters.start, filters.end)
            start_at, end_at = rng.start_at, rng.end_at

        return await repo.list_filtered(
            db,
            role=filters.role,
            belt=filters.belt,
            shift_window=filters.shift_window,
            flow_condition=filters.flow_condition,
            start_at=start_at,
            end_at=end_at,
            limit=filters.limit,
        )

    # ── Deletion ──────────────────────────────────────────────

    async def delete(self, db: AsyncSession, observation_id: int) -> None:
        if not await repo.delete(db, observation_id):
            raise KeyError(OBSERVATION_NOT_FOUND)
        logger.info("Observation deleted", extra={"observation_id": observation_id})

    # ── Export ────────────────────────────────────────────────

    async def export_csv(self, db: AsyncSession, start: str, end: str) -> Tuple[str, str]:
        """Returns (csv_text, filename) for every observation in [start, end]."""
        rng = parse_date_range(start, end)
        observations = await repo.list_in_range(db, rng.start_at, rng.end_at)
        logger.info("CSV export of %d observations (%s → %s)", len(observations), rng.start, rng.end)
        return render_observations(observations), export_filename(rng.start, rng.end)
