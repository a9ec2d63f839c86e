"""Assessment router - FastAPI endpoints for clinical evaluations"""

import io
import logging
import unicodedata
from urllib.parse import quote

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...auth import CurrentUser, get_current_user
from ...database import get_db
from ...models import Assessment
from ...services.assessment_pdf import export_filename, render_assessment_pdf
from ...shared.timeutils import to_wire
from .schemas import (
    ASSESSMENT_FIELDS,
    AssessmentCreate,
    AssessmentResponse,
    AssessmentUpdate,
    ProgressNoteCreate,
    ProgressNoteResponse,
)
from .service import AssessmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/avaliacoes", tags=["Assessments"])


def get_assessment_service(db: Session = Depends(get_db)) -> AssessmentService:
    """Dependency injection for AssessmentService"""
    return AssessmentService(db)


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name"""
    ascii_name = (
        unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    )
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def to_assessment_response(a: Assessment) -> AssessmentResponse:
    fields = {wire_name: getattr(a, column) for wire_name, column in ASSESSMENT_FIELDS.items()}
    return AssessmentResponse(
        id=a.id,
        clienteId=a.patient_id,
        evolucoes=[
            ProgressNoteResponse(id=n.id, evolucao=n.text, dataEvolucao=to_wire(n.recorded_at))
            for n in a.progress_notes
        ],
        createdAt=to_wire(a.created_at),
        updatedAt=to_wire(a.updated_at),
        **fields,
    )


@router.get("", response_model=list[AssessmentResponse])
async def list_assessments(
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    return [to_assessment_response(a) for a in service.list_assessments()]


@router.get("/cliente/{patient_id}", response_model=list[AssessmentResponse])
async def list_patient_assessments(
    patient_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    """Assessments of one patient, most recent first"""
    return [to_assessment_response(a) for a in service.list_by_patient(patient_id)]


@router.get("/{assessment_id}", response_model=AssessmentResponse)
async def get_assessment(
    assessment_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    return to_assessment_response(service.get_assessment(assessment_id))


@router.post("", response_model=AssessmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(
    data: AssessmentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    """Record a new clinical evaluation"""
    return to_assessment_response(service.create_assessment(data))


@router.put("/{assessment_id}", response_model=AssessmentResponse)
async def replace_assessment(
    assessment_id: int,
    data: AssessmentUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    """Replace the evaluation form; progress notes are kept as they are"""
    return to_assessment_response(service.replace_assessment(assessment_id, data))


@router.delete("/{assessment_id}")
async def delete_assessment(
    assessment_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    return service.delete_assessment(assessment_id)


@router.post(
    "/{assessment_id}/evolucoes",
    response_model=AssessmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_progress_note(
    assessment_id: int,
    data: ProgressNoteCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    """Append a dated progress note to an assessment"""
    return to_assessment_response(service.append_progress_note(assessment_id, data.evolucao))


@router.get("/{assessment_id}/pdf")
async def download_assessment_pdf(
    assessment_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
):
    """Render the assessment as a PDF download"""
    assessment = service.get_assessment(assessment_id)
    patient = service.get_patient(assessment.patient_id)

    pdf_bytes = render_assessment_pdf(assessment, patient)
    filename = export_filename(patient.full_name, assessment.assessment_date)
    logger.info(f"📄 Exported assessment {assessment_id} as {filename} ({len(pdf_bytes)} bytes)")

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )
