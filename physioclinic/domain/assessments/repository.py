"""Assessment repository - Database operations for assessments and progress notes"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Assessment, Patient, ProgressNote


class AssessmentRepository:
    """Repository for assessment database operations"""

    @staticmethod
    def get_assessments(db: Session) -> list[Assessment]:
        """Most recent evaluations first"""
        return (
            db.query(Assessment)
            .order_by(Assessment.assessment_date.desc(), Assessment.id.desc())
            .all()
        )

    @staticmethod
    def get_assessments_by_patient(db: Session, patient_id: int) -> list[Assessment]:
        return (
            db.query(Assessment)
            .filter(Assessment.patient_id == patient_id)
            .order_by(Assessment.assessment_date.desc(), Assessment.id.desc())
            .all()
        )

    @staticmethod
    def get_assessment_by_id(db: Session, assessment_id: int) -> Optional[Assessment]:
        return db.query(Assessment).filter(Assessment.id == assessment_id).first()

    @staticmethod
    def get_patient(db: Session, patient_id: int) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def create_assessment(db: Session, **assessment_data) -> Assessment:
        assessment = Assessment(**assessment_data)
        db.add(assessment)
        db.commit()
        db.refresh(assessment)
        return assessment

    @staticmethod
    def update_assessment(db: Session, assessment: Assessment, **updates) -> Assessment:
        for key, value in updates.items():
            if hasattr(assessment, key):
                setattr(assessment, key, value)

        db.commit()
        db.refresh(assessment)
        return assessment

    @staticmethod
    def add_progress_note(db: Session, assessment: Assessment, note: ProgressNote) -> ProgressNote:
        """Append a note and touch the parent in the same transaction"""
        try:
            assessment.progress_notes.append(note)
            assessment.updated_at = note.recorded_at
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(note)
        db.refresh(assessment)
        return note

    @staticmethod
    def delete_assessment(db: Session, assessment: Assessment) -> None:
        db.delete(assessment)
        db.commit()
