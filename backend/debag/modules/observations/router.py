# modules/observations/router.py
"""
Observation endpoints: capture, filtered listing, deletion, CSV export.

Rule: zero db.execute here. Everything goes through ObservationService.
"""
from pydantic import ValidationError
from fastapi import APIRouter, HTTPException, Query, Response, status
from typing import List, Optional

from debag.shared.deps import DbDep
from debag.shared.schemas import ERROR_RESPONSES
from debag.shared.validators import first_error_message
from debag.modules.observations.service import ObservationService
from debag.modules.observations.schemas import (
    ObservationCreateIn,
    ObservationFilters,
    ObservationOut,
)

router = APIRouter(
    prefix="/observations",
    tags=["Observations"],
    responses=ERROR_RESPONSES,
)
service = ObservationService()


# ─────────────────────────────────────────────
# LISTING
# ─────────────────────────────────────────────

@router.get(
    "",
    response_model=List[ObservationOut],
    summary="Filtered observations, newest first",
)
async def list_observations(
    db: DbDep,
    role: Optional[str] = Query(None),
    belt: Optional[str] = Query(None),
    shift_window: Optional[str] = Query(None, alias="shiftWindow"),
    shift_window_snake: Optional[str] = Query(None, alias="shift_window"),
    flow_condition: Optional[str] = Query(None, alias="flowCondition"),
    flow_condition_snake: Optional[str] = Query(None, alias="flow_condition"),
    limit: Optional[str] = Query(None),
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
):
    """
    All filters optional; limit 1–200 (default 50).
    The date range applies only when both start and end are given.
    """
    try:
        filters = ObservationFilters(
            role=role,
            belt=belt,
            shift_window=shift_window or shift_window_snake,
            flow_condition=flow_condition or flow_condition_snake,
            limit=limit,
            start=start,
            end=end,
        )
        return await service.list_observations(db, filters)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=first_error_message(e.errors())
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# ─────────────────────────────────────────────
# CSV EXPORT
# ─────────────────────────────────────────────

@router.get(
    "/export",
    response_class=Response,
    summary="CSV export over a date range",
)
async def export_observations(
    db: DbDep,
    start: str = Query(..., min_length=1),
    end: str = Query(..., min_length=1),
):
    try:
        csv_text, filename = await service.export_csv(db, start, end)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ─────────────────────────────────────────────
# CAPTURE / DELETE
# ─────────────────────────────────────────────

@router.post(
    "",
    response_model=ObservationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record an observation",
)
async def create_observation(payload: ObservationCreateIn, db: DbDep):
    """avgSecondsPerBag is computed server-side."""
    try:
        return await service.create(db, payload)
    except KeyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.args[0])


@router.delete(
    "/{observation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an observation",
)
async def delete_observation(observation_id: str, db: DbDep):
    # ASCII digits only: no sign, no decimal point, no other scripts
    is_ascii_int = observation_id.isascii() and observation_id.isdecimal()
    obs_id = int(observation_id) if is_ascii_int else 0
    if obs_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid observation id."
        )

    try:
        await service.delete(db, obs_id)
    except KeyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.args[0])
    return Response(status_code=status.HTTP_204_NO_CONTENT)

