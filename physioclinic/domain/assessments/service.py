"""Assessment service - Business logic for clinical evaluations"""

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...errors import NotFoundError, ValidationError
from ...models import Assessment, Patient, ProgressNote
from ...shared.timeutils import clinic_now, clinic_today
from .repository import AssessmentRepository
from .schemas import ASSESSMENT_FIELDS, AssessmentCreate, AssessmentUpdate

logger = logging.getLogger(__name__)

PAIN_SCORE_MIN = 0
PAIN_SCORE_MAX = 10


def check_pain_score(score: Optional[int]) -> int:
    """Pain is scored on the 0-10 visual analogue scale, inclusive"""
    if score is None:
        return PAIN_SCORE_MIN
    if not PAIN_SCORE_MIN <= score <= PAIN_SCORE_MAX:
        raise ValidationError(
            f"avaliacaoDor must be between {PAIN_SCORE_MIN} and {PAIN_SCORE_MAX}, got {score}"
        )
    return score


def progress_timeline(assessment: Assessment) -> list[ProgressNote]:
    """Progress notes newest first"""
    return sorted(
        assessment.progress_notes,
        key=lambda note: (note.recorded_at, note.id),
        reverse=True,
    )


def _column_values(data: dict[str, Any]) -> dict[str, Any]:
    return {
        ASSESSMENT_FIELDS[wire_name]: value
        for wire_name, value in data.items()
        if wire_name in ASSESSMENT_FIELDS
    }


class AssessmentService:
    """Service layer for assessment records"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssessmentRepository()

    def list_assessments(self) -> list[Assessment]:
        return self.repo.get_assessments(self.db)

    def list_by_patient(self, patient_id: int) -> list[Assessment]:
        return self.repo.get_assessments_by_patient(self.db, patient_id)

    def get_assessment(self, assessment_id: int) -> Assessment:
        assessment = self.repo.get_assessment_by_id(self.db, assessment_id)
        if not assessment:
            raise NotFoundError(f"Assessment {assessment_id} not found")
        return assessment

    def get_patient(self, patient_id: int) -> Patient:
        patient = self.repo.get_patient(self.db, patient_id)
        if not patient:
            raise NotFoundError(f"Patient {patient_id} not found")
        return patient

    def create_assessment(self, data: AssessmentCreate) -> Assessment:
        patient = self.get_patient(data.clienteId)
        values = _column_values(data.model_dump())
        values["pain_score"] = check_pain_score(values.get("pain_score"))
        values["assessment_date"] = values.get("assessment_date") or clinic_today()

        now = clinic_now()
        assessment = self.repo.create_assessment(
            self.db, patient_id=patient.id, created_at=now, updated_at=now, **values
        )
        logger.info(f"🩺 Assessment {assessment.id} recorded for patient {patient.id}")
        return assessment

    def replace_assessment(self, assessment_id: int, data: AssessmentUpdate) -> Assessment:
        """
        Overwrite every form field.

        Progress notes and the owning patient are left untouched.
        """
        assessment = self.get_assessment(assessment_id)
        if data.clienteId is not None and data.clienteId != assessment.patient_id:
            raise ValidationError("An assessment cannot be moved to another patient")

        values = _column_values(data.model_dump())
        values["pain_score"] = check_pain_score(values.get("pain_score"))
        values["assessment_date"] = values.get("assessment_date") or assessment.assessment_date
        values["updated_at"] = clinic_now()
        return self.repo.update_assessment(self.db, assessment, **values)

    def delete_assessment(self, assessment_id: int) -> dict:
        assessment = self.get_assessment(assessment_id)
        self.repo.delete_assessment(self.db, assessment)
        logger.info(f"🗑️ Assessment {assessment_id} deleted")
        return {"message": "Assessment deleted"}

    def append_progress_note(self, assessment_id: int, text: Optional[str]) -> Assessment:
        """
        Append a dated progress note.

        Existing notes are never edited or reordered; the timestamp is
        assigned here, not by the caller.
        """
        if text is None or not text.strip():
            raise ValidationError("Progress note text cannot be empty")

        assessment = self.get_assessment(assessment_id)
        note = ProgressNote(text=text.strip(), recorded_at=clinic_now())
        self.repo.add_progress_note(self.db, assessment, note)
        logger.info(
            f"📝 Progress note {note.id} added to assessment {assessment_id} "
            f"({len(assessment.progress_notes)} total)"
        )
        return assessment
