# engine/metrics/aggregation.py
"""
DeBag report aggregation - ZERO DB access.
Receives a flat list of observations (each with its person), returns the
per-person and per-role summaries.

Metrics per group:
- observations      : count
- avgSecondsPerBag  : mean of the stored avg_seconds_per_bag values
- qualityIssueRate  : 100 × quality_issue count / count
- safetyIssueRate   : 100 × safety_issue count / count

Every figure is rounded to 2 dp, half away from zero. An empty group
yields 0 everywhere, never NaN.
"""
from __future__ import annotations

import numpy as np
import unicodedata
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Sequence

from debag.shared.enums import Role

_CENT = Decimal("0.01")


# ── Rounding ──────────────────────────────────────────────────────────────────

def round2(value: float) -> float:
    """
    Round to 2 dp, half away from zero.

    Works on the shortest repr of the float (str()), so 1.005 → 1.01 rather
    than the binary-float 1.0 that round() would give.
    """
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def seconds_per_bag(total_seconds: int, bags_timed: int) -> float:
    """Stored average for a new observation: round(total / bags, 2)."""
    if bags_timed < 1:
        raise ValueError("bags_timed must be >= 1")
    return round2(total_seconds / bags_timed)


def average(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return round2(float(np.mean(values)))


def percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round2(count / total * 100)


# ── Results ───────────────────────────────────────────────────────────────────

@dataclass
class GroupMetrics:
    observations: int
    avg_seconds_per_bag: float
    quality_issue_rate: float
    safety_issue_rate: float


@dataclass
class PersonSummary:
    person_id: int
    person_name: str
    observations: int
    avg_seconds_per_bag: float
    quality_issue_rate: float
    safety_issue_rate: float


@dataclass
class RoleSummary:
    role: Role
    observations: int
    avg_seconds_per_bag: float
    quality_issue_rate: float
    safety_issue_rate: float


@dataclass
class Report:
    start: str
    end: str
    total_observations: int
    per_person: List[PersonSummary]
    by_role: List[RoleSummary]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "range": {"start": self.start, "end": self.end},
            "totals": {"observations": self.total_observations},
            "per_person": [asdict(p) for p in self.per_person],
            "by_role": [asdict(r) for r in self.by_role],
        }


# ── Computation ───────────────────────────────────────────────────────────────

def group_metrics(observations: Sequence[Any]) -> GroupMetrics:
    """The four metrics over any group of observations (possibly empty)."""
    count = len(observations)
    return GroupMetrics(
        observations=count,
        avg_seconds_per_bag=average([o.avg_seconds_per_bag for o in observations]),
        quality_issue_rate=percentage(sum(1 for o in observations if o.quality_issue), count),
        safety_issue_rate=percentage(sum(1 for o in observations if o.safety_issue), count),
    )


def display_name(observation: Any) -> str:
    person = getattr(observation, "person", None)
    if person is None:
        raise ValueError(f"Observation {getattr(observation, 'id', '?')} has no linked person")
    return person.name or person.employee_code or f"ID {observation.person_id}"


def _name_key(name: str):
    """
    Collation key close to a default locale compare: base letters first
    (accents and case ignored), then unaccented before accented, then
    lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (
        base.casefold(),
        decomposed.casefold(),
        tuple(c.isupper() for c in base),
        name,
    )


def summarize_people(observations: Iterable[Any]) -> List[PersonSummary]:
    groups: Dict[int, List[Any]] = {}
    names: Dict[int, str] = {}
    for obs in observations:
        if obs.person_id not in groups:
            groups[obs.person_id] = []
            names[obs.person_id] = display_name(obs)
        groups[obs.person_id].append(obs)

    summaries = []
    for person_id, items in groups.items():
        m = group_metrics(items)
        summaries.append(PersonSummary(
            person_id=person_id,
            person_name=names[person_id],
            observations=m.observations,
            avg_seconds_per_bag=m.avg_seconds_per_bag,
            quality_issue_rate=m.quality_issue_rate,
            safety_issue_rate=m.safety_issue_rate,
        ))

    summaries.sort(key=lambda s: _name_key(s.person_name))
    return summaries


def summarize_roles(observations: Sequence[Any]) -> List[RoleSummary]:
    """
    One entry per Role member, in declaration order.

    The role set comes from the enum, never from the data: a role with no
    observation in range is still reported, with zeros.
    """
    summaries = []
    for role in Role:
        m = group_metrics([o for o in observations if o.role == role])
        summaries.append(RoleSummary(
            role=role,
            observations=m.observations,
            avg_seconds_per_bag=m.avg_seconds_per_bag,
            quality_issue_rate=m.quality_issue_rate,
            safety_issue_rate=m.safety_issue_rate,
        ))
    return summaries


def build_report(observations: Sequence[Any], start: str, end: str) -> Report:
    """
    Aggregate observations already bounded to [start, end].

    Args:
        observations: ORM Observation rows (or any object exposing the same
                      attributes), each with a resolved .person.
        start, end:   the calendar dates echoed back in the report range.
    """
    observations = list(observations)
    return Report(
        start=start,
        end=end,
        total_observations=len(observations),
        per_person=summarize_people(observations),
        by_role=summarize_roles(observations),
    )
