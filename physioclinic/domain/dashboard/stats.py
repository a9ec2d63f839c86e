"""Dashboard aggregation - pure functions over a set of sessions"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Protocol

from ...enums import SessionStatus
from ...shared.timeutils import day_range, week_range


class _SessionLike(Protocol):
    status: str


@dataclass(frozen=True)
class DashboardStats:
    total_patients: int
    sessions_today: int
    sessions_this_week: int
    completion_rate: int


def _start_of(session) -> datetime:
    # ORM rows carry starts_at, client records carry start
    return getattr(session, "starts_at", None) or session.start


def _status_of(session) -> str:
    status = session.status
    return status.value if isinstance(status, SessionStatus) else str(status)


def completion_rate(sessions: Iterable[_SessionLike]) -> int:
    """Percentage of completed sessions, rounded; 0 for an empty set"""
    statuses = [_status_of(s) for s in sessions]
    if not statuses:
        return 0
    completed = sum(1 for status in statuses if status == SessionStatus.COMPLETED.value)
    return round(completed / len(statuses) * 100)


def compute_stats(sessions: Iterable, today: date, total_patients: int) -> DashboardStats:
    """
    Headline numbers for the dashboard.

    ``sessions`` is the set the completion rate is computed over (the whole
    history or a requested window); today and week counts are taken from
    the same set. Weeks run Monday to Sunday.
    """
    sessions = list(sessions)
    day_start, day_end = day_range(today)
    week_start, week_end = week_range(today)

    return DashboardStats(
        total_patients=total_patients,
        sessions_today=sum(1 for s in sessions if day_start <= _start_of(s) <= day_end),
        sessions_this_week=sum(1 for s in sessions if week_start <= _start_of(s) <= week_end),
        completion_rate=completion_rate(sessions),
    )
