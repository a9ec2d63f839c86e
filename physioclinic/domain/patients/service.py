"""Patient service - Business logic for the patient directory"""

import enum
import logging
from typing import Any

from sqlalchemy.orm import Session

from ...errors import NotFoundError, ValidationError
from ...models import Patient
from ...shared.timeutils import clinic_today
from .repository import PatientRepository
from .schemas import PATIENT_FIELDS, PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("full_name", "email", "phone")


def _column_values(data: dict[str, Any]) -> dict[str, Any]:
    """Translate wire field names into column names"""
    values = {}
    for wire_name, value in data.items():
        if wire_name not in PATIENT_FIELDS:
            continue
        if isinstance(value, enum.Enum):
            value = value.value
        values[PATIENT_FIELDS[wire_name]] = value
    return values


class PatientService:
    """Service layer for the patient directory"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def get_patients(self) -> list[Patient]:
        return self.repo.get_patients(self.db)

    def search_patients(self, term: str) -> list[Patient]:
        term = (term or "").strip()
        if not term:
            return self.get_patients()
        return self.repo.search_patients(self.db, term)

    def get_patient(self, patient_id: int) -> Patient:
        patient = self.repo.get_patient_by_id(self.db, patient_id)
        if not patient:
            raise NotFoundError(f"Patient {patient_id} not found")
        return patient

    def count_patients(self) -> int:
        return self.repo.count_patients(self.db)

    def create_patient(self, data: PatientCreate) -> Patient:
        """Create a patient; the registration date is assigned here"""
        values = _column_values(data.model_dump())
        self._check_required(values)
        values["registered_on"] = clinic_today()

        patient = self.repo.create_patient(self.db, **values)
        logger.info(f"📥 Patient {patient.id} registered ({patient.full_name})")
        return patient

    def replace_patient(self, patient_id: int, data: PatientCreate) -> Patient:
        """Full field replace - omitted optional fields are cleared"""
        patient = self.get_patient(patient_id)
        values = _column_values(data.model_dump())
        self._check_required(values)
        return self.repo.update_patient(self.db, patient, **values)

    def update_patient(self, patient_id: int, data: PatientUpdate) -> Patient:
        """Partial update - only fields present in the request change"""
        patient = self.get_patient(patient_id)
        values = _column_values(data.model_dump(exclude_unset=True))
        for column in REQUIRED_COLUMNS:
            if column in values and not values[column]:
                raise ValidationError(f"{column} cannot be cleared")
        return self.repo.update_patient(self.db, patient, **values)

    def delete_patient(self, patient_id: int) -> dict:
        patient = self.get_patient(patient_id)
        self.repo.delete_patient(self.db, patient)
        logger.info(f"🗑️ Patient {patient_id} deleted with their sessions and assessments")
        return {"message": "Patient deleted"}

    @staticmethod
    def _check_required(values: dict[str, Any]) -> None:
        missing = [column for column in REQUIRED_COLUMNS if not values.get(column)]
        if missing:
            logger.warning(f"⚠️ Patient rejected, missing: {missing}")
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
