"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients(db: Session) -> list[Patient]:
        """Get all patients ordered by name"""
        return db.query(Patient).order_by(Patient.full_name.asc(), Patient.id.asc()).all()

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
        """Get a specific patient by ID"""
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def search_patients(db: Session, term: str) -> list[Patient]:
        """Case-insensitive substring search on name and email"""
        search_term = f"%{term.lower()}%"
        return (
            db.query(Patient)
            .filter(
                (func.lower(Patient.full_name).like(search_term))
                | (func.lower(Patient.email).like(search_term))
            )
            .order_by(Patient.full_name.asc(), Patient.id.asc())
            .all()
        )

    @staticmethod
    def count_patients(db: Session) -> int:
        return db.query(func.count(Patient.id)).scalar() or 0

    @staticmethod
    def create_patient(db: Session, **patient_data) -> Patient:
        """Create a new patient"""
        patient = Patient(**patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        """Overwrite the given columns (None clears a column)"""
        for key, value in updates.items():
            if hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def delete_patient(db: Session, patient: Patient) -> None:
        """Delete a patient together with their sessions and assessments"""
        db.delete(patient)
        db.commit()
