# modules/reports/router.py
"""
Supervisor report: per-person and per-role throughput / issue rates.

Rule: zero db.execute here. Everything goes through ReportService.
"""
from fastapi import APIRouter, HTTPException, Query, status

from debag.shared.deps import DbDep
from debag.shared.schemas import ERROR_RESPONSES
from debag.modules.reports.service import ReportService
from debag.modules.reports.schemas import ReportOut

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses=ERROR_RESPONSES,
)
service = ReportService()


@router.get(
    "",
    response_model=ReportOut,
    summary="Date-range report",
)
async def get_report(
    db: DbDep,
    start: str = Query(..., min_length=1),
    end: str = Query(..., min_length=1),
):
    """
    Returns :
    - range  : the requested start / end dates
    - totals : number of observations in range
    - perPerson : sorted by display name
    - byRole    : DUMPER then UNZIPPER, zero-filled
    """
    try:
        return await service.build_report(db, start, end)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
