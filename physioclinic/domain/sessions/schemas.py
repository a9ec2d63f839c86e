"""Session domain schemas - wire shape of a scheduled appointment"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...enums import SessionStatus


class SessionCreate(BaseModel):
    """Schema for scheduling a new session"""

    clienteId: int
    dataHoraInicio: datetime
    dataHoraFim: datetime
    nome: Optional[str] = None
    status: Optional[SessionStatus] = None
    notasSessao: Optional[str] = None
    notificacao: Optional[bool] = False


class SessionUpdate(BaseModel):
    """Schema for editing a session - the owning patient cannot change"""

    clienteId: Optional[int] = None
    nome: Optional[str] = None
    dataHoraInicio: Optional[datetime] = None
    dataHoraFim: Optional[datetime] = None
    status: Optional[SessionStatus] = None
    notasSessao: Optional[str] = None
    notificacao: Optional[bool] = None


class RescheduleRequest(BaseModel):
    """New time window produced by a drag or resize gesture"""

    dataHoraInicio: datetime
    dataHoraFim: datetime


class StatusUpdateRequest(BaseModel):
    status: SessionStatus


class SessionResponse(BaseModel):
    """Schema for session response - timestamps carry no offset"""

    id: int
    clienteId: int
    nome: str
    dataHoraInicio: str
    dataHoraFim: str
    status: SessionStatus
    notasSessao: Optional[str] = None
    notificacao: bool = False

    class Config:
        from_attributes = True
