"""Dashboard router - headline numbers and today's agenda"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import CurrentUser, get_current_user
from ...database import get_db
from ...errors import ValidationError
from ..sessions.router import to_session_response
from ..sessions.schemas import SessionResponse
from .schemas import DashboardStatsResponse
from .service import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    """Dependency injection for DashboardService"""
    return DashboardService(db)


@router.get("/estatisticas", response_model=DashboardStatsResponse)
async def get_statistics(
    inicio: Optional[str] = Query(None, description="Window start for the completion rate"),
    fim: Optional[str] = Query(None, description="Window end for the completion rate"),
    current_user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    if (inicio is None) != (fim is None):
        raise ValidationError("inicio and fim must be provided together")

    stats = service.get_stats(inicio, fim)
    return DashboardStatsResponse(
        totalClientes=stats.total_patients,
        sessoesHoje=stats.sessions_today,
        sessoesSemana=stats.sessions_this_week,
        taxaConclusao=stats.completion_rate,
    )


@router.get("/sessoes-hoje", response_model=list[SessionResponse])
async def get_sessions_today(
    current_user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Today's sessions, earliest first"""
    return [to_session_response(s) for s in service.sessions_today()]
