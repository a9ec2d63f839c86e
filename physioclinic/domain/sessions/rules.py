"""Invariants every session store enforces, whatever its backend"""

from datetime import datetime
from typing import Union

from ...enums import SessionStatus
from ...errors import InvalidRangeError, ValidationError
from ...shared.timeutils import TimestampInput, parse_timestamp


def parse_session_time(value: TimestampInput, field_name: str) -> datetime:
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise ValidationError(f"{field_name} is not a valid timestamp: {value}") from e


def check_time_window(start: datetime, end: datetime) -> None:
    """A session must end strictly after it starts"""
    if end <= start:
        raise ValidationError(
            f"Session end ({end.isoformat()}) must be after its start ({start.isoformat()})"
        )


def check_range(start: datetime, end: datetime) -> None:
    if start > end:
        raise InvalidRangeError(
            f"Invalid range: start {start.isoformat()} is after end {end.isoformat()}"
        )


def parse_status(value: Union[str, SessionStatus]) -> SessionStatus:
    """
    Any of the four statuses is accepted from any other status; there is no
    transition table.
    """
    try:
        return SessionStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in SessionStatus)
        raise ValidationError(f"Invalid status '{value}'. Expected one of: {allowed}") from e


def default_label(patient_name: str) -> str:
    return f"{patient_name} - Physiotherapy"
