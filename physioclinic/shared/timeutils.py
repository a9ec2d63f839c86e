"""
Timestamp helpers.

Every timestamp is stored as a naive wall-clock time in ``CLINIC_TIMEZONE``.
Values carrying an explicit offset are converted into that zone at the edge
and then stripped of tzinfo, so comparisons never mix naive and aware values.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config import CLINIC_TIMEZONE

WIRE_FORMAT = "%Y-%m-%dT%H:%M:%S"

TimestampInput = Union[str, datetime, date]


def clinic_zone() -> ZoneInfo:
    return ZoneInfo(CLINIC_TIMEZONE)


def clinic_now() -> datetime:
    """Current clinic-local time, naive, second precision"""
    return datetime.now(clinic_zone()).replace(tzinfo=None, microsecond=0)


def clinic_today() -> date:
    return clinic_now().date()


def to_clinic_local(value: datetime) -> datetime:
    """Normalize an aware datetime into naive clinic-local time"""
    if value.tzinfo is None:
        return value
    return value.astimezone(clinic_zone()).replace(tzinfo=None)


def parse_timestamp(value: TimestampInput) -> datetime:
    """
    Parse an ISO-8601 timestamp into naive clinic-local time, truncated to
    whole seconds so it survives the wire format unchanged.

    Raises:
        ValueError: if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return to_clinic_local(value).replace(microsecond=0)
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    raw = str(value).strip()
    if not raw:
        raise ValueError("Timestamp cannot be empty")
    # fromisoformat only learned about "Z" in 3.11
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return to_clinic_local(datetime.fromisoformat(raw)).replace(microsecond=0)


def _is_date_only(value: TimestampInput) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return "T" not in str(value).strip() and " " not in str(value).strip()


def parse_range_bound(value: TimestampInput, end: bool = False) -> datetime:
    """
    Parse one side of a date range.

    A date-only bound covers the whole day: the start bound becomes 00:00 and
    the end bound becomes the last microsecond of that day.
    """
    if _is_date_only(value):
        day = value if isinstance(value, date) else date.fromisoformat(str(value).strip())
        return datetime.combine(day, time.max if end else time.min)
    return parse_timestamp(value)


def to_wire(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp the way the frontend expects (no offset)"""
    if value is None:
        return None
    return value.strftime(WIRE_FORMAT)


def day_range(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def week_range(day: date) -> tuple[datetime, datetime]:
    """Monday 00:00 through Sunday 23:59:59.999999 of the week containing ``day``"""
    monday = day - timedelta(days=day.weekday())
    sunday = monday + timedelta(days=6)
    return datetime.combine(monday, time.min), datetime.combine(sunday, time.max)
