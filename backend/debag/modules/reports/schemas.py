# debag/modules/reports/schemas.py
from pydantic import BaseModel
from typing import List

from debag.shared.enums import Role
from debag.shared.schemas import CamelModel


class RangeOut(BaseModel):
    start: str
    end: str


class TotalsOut(BaseModel):
    observations: int


class PersonSummaryOut(CamelModel):
    person_id: int
    person_name: str
    observations: int
    avg_seconds_per_bag: float
    quality_issue_rate: float     # 0–100
    safety_issue_rate: float      # 0–100


class RoleSummaryOut(CamelModel):
    role: Role
    observations: int
    avg_seconds_per_bag: float
    quality_issue_rate: float
    safety_issue_rate: float


class ReportOut(CamelModel):
    range: RangeOut
    totals: TotalsOut
    per_person: List[PersonSummaryOut]
    by_role: List[RoleSummaryOut]     # always DUMPER, UNZIPPER
