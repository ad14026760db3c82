# engine/export/csv_writer.py
"""
CSV rendering of observations - ZERO DB access.

Escaping rule: a cell is quoted (internal quotes doubled) if and only if it
contains a comma, a double quote or a newline. Rows are joined with "\n",
with no trailing newline after the last row.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Sequence

HEADER = [
    "created_at",
    "person",
    "employee_code",
    "role",
    "belt",
    "shift_window",
    "bags_timed",
    "total_seconds",
    "avg_seconds_per_bag",
    "flow_condition",
    "quality_issue",
    "safety_issue",
    "notes",
]


def iso_utc(value: datetime) -> str:
    """2025-01-15T10:00:00.000Z - naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_cell(value: Any) -> str:
    text = _stringify(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def observation_row(obs: Any) -> List[Any]:
    person = obs.person
    return [
        iso_utc(obs.created_at),
        person.name or "",
        person.employee_code or "",
        obs.role,
        obs.belt,
        obs.shift_window,
        obs.bags_timed,
        obs.total_seconds,
        obs.avg_seconds_per_bag,
        obs.flow_condition,
        obs.quality_issue,
        obs.safety_issue,
        obs.notes or "",
    ]


def render_rows(rows: Iterable[Sequence[Any]]) -> str:
    return "\n".join(",".join(escape_cell(cell) for cell in row) for row in rows)


def render_observations(observations: Iterable[Any]) -> str:
    """Header + one row per observation, in the order supplied."""
    return render_rows([HEADER] + [observation_row(o) for o in observations])


def export_filename(start: str, end: str) -> str:
    return f"debags_{start}_to_{end}.csv"
