# debag/modules/observations/schemas.py
from pydantic import Field, PositiveInt, field_validator
from typing import Optional
from datetime import datetime

from debag.shared.enums import Role, Belt, ShiftWindow, FlowCondition
from debag.shared.schemas import CamelModel
from debag.modules.people.schemas import PersonOut


# ── Creation ───────────────────────────────────────────────

class ObservationCreateIn(CamelModel):
    person_id: PositiveInt
    role: Role
    belt: Belt
    shift_window: ShiftWindow
    bags_timed: int = Field(10, ge=1, le=500)
    total_seconds: int = Field(..., ge=1, le=100000)
    flow_condition: FlowCondition = FlowCondition.NORMAL
    quality_issue: bool = False
    safety_issue: bool = False
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("notes", mode="before")
    @classmethod
    def _trim_notes(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class ObservationOut(CamelModel):
    id: int
    person_id: int
    role: Role
    belt: Belt
    shift_window: ShiftWindow
    bags_timed: int
    total_seconds: int
    avg_seconds_per_bag: float
    flow_condition: FlowCondition
    quality_issue: bool
    safety_issue: bool
    notes: Optional[str] = None
    created_at: datetime
    person: PersonOut


# ── Listing ────────────────────────────────────────────────

class ObservationFilters(CamelModel):
    role: Optional[Role] = None
    belt: Optional[Belt] = None
    shift_window: Optional[ShiftWindow] = None
    flow_condition: Optional[FlowCondition] = None
    limit: int = Field(50, ge=1, le=200)
    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, v, info):
        # Empty query-string values (?role=) mean "no filter".
        if isinstance(v, str) and not v.strip():
            v = None
        if v is None and info.field_name == "limit":
            return 50
        return v
