# modules/reports/service.py
"""
Report façade: one range-bounded read, then the pure aggregation engine.

The date range is parsed before any store access; a bad range never
reaches the database.
"""
import logging
import time
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any

from debag.engine.metrics.aggregation import build_report
from debag.modules.observations.repository import ObservationRepository
from debag.shared.validators import parse_date_range

logger = logging.getLogger(__name__)

repo = ObservationRepository()


class ReportService:

    async def build_report(self, db: AsyncSession, start: str, end: str) -> Dict[str, Any]:
        rng = parse_date_range(start, end)

        started = time.perf_counter()
        observations = await repo.list_in_range(db, rng.start_at, rng.end_at)
        report = build_report(observations, start=rng.start, end=rng.end)

        logger.info(
            "Report built for %s → %s (%d observations)",
            rng.start, rng.end, report.total_observations,
            extra={"duration_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return report.to_dict()
