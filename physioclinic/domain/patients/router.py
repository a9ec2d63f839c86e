"""Patient router - FastAPI endpoints for the patient directory"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import CurrentUser, get_current_user
from ...database import get_db
from ...models import Patient
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clientes", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


def to_patient_response(p: Patient) -> PatientResponse:
    return PatientResponse(
        id=p.id,
        nome=p.full_name,
        email=p.email,
        telefone=p.phone,
        dataNascimento=p.birth_date,
        dataCadastro=p.registered_on,
        sexo=p.sex,
        cidade=p.city,
        bairro=p.neighborhood,
        profissao=p.occupation,
        enderecoResidencial=p.home_address,
        enderecoComercial=p.work_address,
        naturalidade=p.nationality,
        estadoCivil=p.marital_status,
    )


@router.get("", response_model=list[PatientResponse])
async def list_patients(
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """List every patient ordered by name"""
    return [to_patient_response(p) for p in service.get_patients()]


@router.get("/buscar", response_model=list[PatientResponse])
async def search_patients(
    nome: Optional[str] = Query(None, description="Name or email fragment"),
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Search patients by name"""
    return [to_patient_response(p) for p in service.search_patients(nome or "")]


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return to_patient_response(service.get_patient(patient_id))


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Register a new patient"""
    return to_patient_response(service.create_patient(data))


@router.put("/{patient_id}", response_model=PatientResponse)
async def replace_patient(
    patient_id: int,
    data: PatientCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Replace every editable field of a patient"""
    return to_patient_response(service.replace_patient(patient_id, data))


@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Update only the provided fields"""
    return to_patient_response(service.update_patient(patient_id, data))


@router.delete("/{patient_id}")
async def delete_patient(
    patient_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Delete a patient (cascades to sessions and assessments)"""
    return service.delete_patient(patient_id)
