"""Dashboard service - gathers sessions and patient counts for the stats"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import TherapySession
from ...shared.timeutils import TimestampInput, clinic_today, day_range
from ..patients.service import PatientService
from ..sessions.service import SessionService
from .stats import DashboardStats, compute_stats

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.patients = PatientService(db)
        self.sessions = SessionService(db)

    def get_stats(
        self,
        start: Optional[TimestampInput] = None,
        end: Optional[TimestampInput] = None,
        today: Optional[date] = None,
    ) -> DashboardStats:
        """Stats over every session, or over [start, end] when both are given"""
        today = today or clinic_today()
        if start is not None and end is not None:
            sessions = self.sessions.list_by_date_range(start, end)
        else:
            sessions = self.sessions.list_all()

        stats = compute_stats(sessions, today, self.patients.count_patients())
        logger.debug(f"📊 Dashboard stats: {stats}")
        return stats

    def sessions_today(self, today: Optional[date] = None) -> list[TherapySession]:
        start, end = day_range(today or clinic_today())
        return self.sessions.list_by_date_range(start, end)
