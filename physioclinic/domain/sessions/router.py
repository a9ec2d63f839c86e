"""Session router - FastAPI endpoints for the scheduling calendar"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import CurrentUser, get_current_user
from ...database import get_db
from ...errors import ValidationError
from ...models import TherapySession
from ...shared.timeutils import to_wire
from .schemas import (
    RescheduleRequest,
    SessionCreate,
    SessionResponse,
    SessionUpdate,
    StatusUpdateRequest,
)
from .service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessoes", tags=["Sessions"])


def get_session_service(db: Session = Depends(get_db)) -> SessionService:
    """Dependency injection for SessionService"""
    return SessionService(db)


def to_session_response(s: TherapySession) -> SessionResponse:
    return SessionResponse(
        id=s.id,
        clienteId=s.patient_id,
        nome=s.label,
        dataHoraInicio=to_wire(s.starts_at),
        dataHoraFim=to_wire(s.ends_at),
        status=s.status,
        notasSessao=s.notes,
        notificacao=bool(s.notify),
    )


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    inicio: Optional[str] = Query(None, description="Range start (date or timestamp)"),
    fim: Optional[str] = Query(None, description="Range end (date or timestamp), inclusive"),
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """List sessions, optionally restricted to a period, earliest first"""
    if inicio is None and fim is None:
        sessions = service.list_all()
    elif inicio is None or fim is None:
        raise ValidationError("inicio and fim must be provided together")
    else:
        sessions = service.list_by_date_range(inicio, fim)
    return [to_session_response(s) for s in sessions]


@router.get("/cliente/{patient_id}", response_model=list[SessionResponse])
async def list_patient_sessions(
    patient_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """All sessions of one patient, earliest first"""
    sessions = sorted(service.list_by_patient(patient_id), key=lambda s: (s.starts_at, s.id))
    return [to_session_response(s) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    return to_session_response(service.get_session(session_id))


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    data: SessionCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Schedule a new session"""
    return to_session_response(service.create_session(data))


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: int,
    data: SessionUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Edit label, notes, notification flag, window or status"""
    return to_session_response(service.update_session(session_id, data))


@router.patch("/{session_id}/mover", response_model=SessionResponse)
async def reschedule_session(
    session_id: int,
    data: RescheduleRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Move a session (drag or resize on the calendar)"""
    session = service.reschedule(session_id, data.dataHoraInicio, data.dataHoraFim)
    return to_session_response(session)


@router.patch("/{session_id}/status", response_model=SessionResponse)
async def update_session_status(
    session_id: int,
    data: StatusUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Set the status of a session"""
    return to_session_response(service.set_status(session_id, data.status))
