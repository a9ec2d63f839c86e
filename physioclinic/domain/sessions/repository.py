"""Session repository - Database operations for scheduled sessions"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient, TherapySession


class SessionRepository:
    """Repository for session database operations"""

    @staticmethod
    def get_sessions(db: Session) -> list[TherapySession]:
        return (
            db.query(TherapySession)
            .order_by(TherapySession.starts_at.asc(), TherapySession.id.asc())
            .all()
        )

    @staticmethod
    def get_sessions_in_range(db: Session, start: datetime, end: datetime) -> list[TherapySession]:
        """Sessions whose start falls within [start, end], earliest first"""
        return (
            db.query(TherapySession)
            .filter(TherapySession.starts_at >= start, TherapySession.starts_at <= end)
            .order_by(TherapySession.starts_at.asc(), TherapySession.id.asc())
            .all()
        )

    @staticmethod
    def get_sessions_by_patient(db: Session, patient_id: int) -> list[TherapySession]:
        return db.query(TherapySession).filter(TherapySession.patient_id == patient_id).all()

    @staticmethod
    def get_session_by_id(db: Session, session_id: int) -> Optional[TherapySession]:
        return db.query(TherapySession).filter(TherapySession.id == session_id).first()

    @staticmethod
    def get_patient(db: Session, patient_id: int) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def create_session(db: Session, **session_data) -> TherapySession:
        session = TherapySession(**session_data)
        db.add(session)
        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def update_session(db: Session, session: TherapySession, **updates) -> TherapySession:
        """Apply every update and commit once, so no partial change is visible"""
        try:
            for key, value in updates.items():
                if hasattr(session, key):
                    setattr(session, key, value)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(session)
        return session
