"""Calendar grid geometry and the event projection rendered by the view"""

import dataclasses
import enum
from datetime import date, datetime, time, timedelta
from typing import Union

from ..enums import SessionStatus
from ..domain.sessions.store import SessionRecord

# Visible window of every day column
DAY_START = time(7, 0)
DAY_END = time(20, 0)
SLOT_MINUTES = 15


class CalendarView(str, enum.Enum):
    WEEK = "week"
    DAY = "day"


STATUS_ACCENTS = {
    SessionStatus.SCHEDULED: "primary",
    SessionStatus.COMPLETED: "secondary",
    SessionStatus.CANCELED: "destructive",
    SessionStatus.NO_SHOW: "muted",
}


@dataclasses.dataclass(frozen=True)
class CalendarEvent:
    id: int
    title: str
    start: datetime
    end: datetime
    status: SessionStatus
    accent: str
    busy: bool = False


def accent_for(status: Union[str, SessionStatus]) -> str:
    return STATUS_ACCENTS[SessionStatus(status)]


def to_event(record: SessionRecord, busy: bool = False) -> CalendarEvent:
    return CalendarEvent(
        id=record.id,
        title=record.label,
        start=record.start,
        end=record.end,
        status=record.status,
        accent=accent_for(record.status),
        busy=busy,
    )


def visible_days(anchor: date, view: Union[str, CalendarView] = CalendarView.WEEK) -> list[date]:
    """The day columns shown for ``anchor``: Monday to Sunday, or the day itself"""
    if CalendarView(view) is CalendarView.DAY:
        return [anchor]
    monday = anchor - timedelta(days=anchor.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]


def visible_range(anchor: date, view: Union[str, CalendarView] = CalendarView.WEEK) -> tuple[date, date]:
    """First and last visible day, both inclusive"""
    days = visible_days(anchor, view)
    return days[0], days[-1]


def slot_times(day: date) -> list[datetime]:
    """Start of every slot between DAY_START and DAY_END"""
    slot = datetime.combine(day, DAY_START)
    last = datetime.combine(day, DAY_END)
    step = timedelta(minutes=SLOT_MINUTES)
    slots = []
    while slot < last:
        slots.append(slot)
        slot += step
    return slots


def snap_to_slot(value: datetime) -> datetime:
    """Floor a timestamp to the start of its slot"""
    minute = value.minute - value.minute % SLOT_MINUTES
    return value.replace(minute=minute, second=0, microsecond=0)
