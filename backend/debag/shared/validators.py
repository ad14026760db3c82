# debag/shared/validators.py
"""
Validation helpers shared by the observations and reports modules.

parse_date_range() is the only place calendar dates become UTC instants:
start → 00:00:00.000, end → 23:59:59.999 (both inclusive).
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

INVALID_RANGE = "Invalid date range."
START_AFTER_END = "Start date cannot be after end date."

_END_OF_DAY = time(23, 59, 59, 999000)
_ISO_DAY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str
    start_at: datetime
    end_at: datetime


def _parse_day(value: Optional[str]) -> date:
    if not isinstance(value, str) or not _ISO_DAY.fullmatch(value.strip()):
        raise ValueError(INVALID_RANGE)
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(INVALID_RANGE) from None


def parse_date_range(start: Optional[str], end: Optional[str]) -> DateRange:
    """
    Expand two calendar dates (YYYY-MM-DD) into an inclusive UTC interval.

    Raises ValueError with a human-readable message when either side is not a
    calendar date or when start is strictly after end. start == end is a
    single-day range.
    """
    start_day = _parse_day(start)
    end_day = _parse_day(end)

    start_at = datetime.combine(start_day, time.min, tzinfo=timezone.utc)
    end_at = datetime.combine(end_day, _END_OF_DAY, tzinfo=timezone.utc)

    if start_at > end_at:
        raise ValueError(START_AFTER_END)

    return DateRange(start=start.strip(), end=end.strip(), start_at=start_at, end_at=end_at)


def first_error_message(errors: List[Dict[str, Any]]) -> str:
    """
    Render the first pydantic/FastAPI error as 'field: message'.

    The request section prefix (body/query/path), integer positions (list
    index, JSON decode offset) and pydantic's "Value error, " prefix are
    dropped; a model-level error has no field.
    """
    if not errors:
        return "Invalid request."
    first = errors[0]
    loc = [
        str(p) for p in first.get("loc", ())
        if not isinstance(p, int) and p not in ("body", "query", "path", "header")
    ]
    msg = str(first.get("msg", "Invalid value."))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{'.'.join(loc)}: {msg}" if loc else msg
