"""Session service - the server-side session store"""

import logging
from typing import Union

from sqlalchemy.orm import Session

from ...enums import SessionStatus
from ...errors import NotFoundError, ValidationError
from ...models import TherapySession
from ...shared.timeutils import TimestampInput, parse_range_bound
from .repository import SessionRepository
from .rules import (
    check_range,
    check_time_window,
    default_label,
    parse_session_time,
    parse_status,
)
from .schemas import SessionCreate, SessionUpdate

logger = logging.getLogger(__name__)


class SessionService:
    """
    Canonical store of scheduled sessions.

    The only writers are ``create_session``, ``update_session``, ``reschedule``
    and ``set_status``; each validates first and commits once.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = SessionRepository()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(self) -> list[TherapySession]:
        return self.repo.get_sessions(self.db)

    def list_by_date_range(self, start: TimestampInput, end: TimestampInput) -> list[TherapySession]:
        """
        Sessions whose start falls within [start, end] inclusive, ascending.

        Date-only bounds cover the whole day.
        """
        try:
            start_dt = parse_range_bound(start)
            end_dt = parse_range_bound(end, end=True)
        except ValueError as e:
            raise ValidationError(f"Malformed date range: {start} - {end}") from e
        check_range(start_dt, end_dt)
        return self.repo.get_sessions_in_range(self.db, start_dt, end_dt)

    def list_by_patient(self, patient_id: int) -> list[TherapySession]:
        """All sessions of a patient, in no particular order"""
        return self.repo.get_sessions_by_patient(self.db, patient_id)

    def get_session(self, session_id: int) -> TherapySession:
        session = self.repo.get_session_by_id(self.db, session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_session(self, data: SessionCreate) -> TherapySession:
        patient = self.repo.get_patient(self.db, data.clienteId)
        if not patient:
            raise NotFoundError(f"Patient {data.clienteId} not found")

        start = parse_session_time(data.dataHoraInicio, "dataHoraInicio")
        end = parse_session_time(data.dataHoraFim, "dataHoraFim")
        check_time_window(start, end)

        label = (data.nome or "").strip() or default_label(patient.full_name)
        status = data.status or SessionStatus.SCHEDULED

        session = self.repo.create_session(
            self.db,
            patient_id=patient.id,
            label=label,
            starts_at=start,
            ends_at=end,
            status=status.value,
            notes=data.notasSessao,
            notify=bool(data.notificacao),
        )
        logger.info(f"📅 Session {session.id} scheduled for patient {patient.id} at {start}")
        return session

    def update_session(self, session_id: int, data: SessionUpdate) -> TherapySession:
        session = self.get_session(session_id)
        fields = data.model_dump(exclude_unset=True)

        if fields.get("clienteId") is not None and fields["clienteId"] != session.patient_id:
            raise ValidationError("A session cannot be moved to another patient")

        updates: dict = {}
        if "dataHoraInicio" in fields or "dataHoraFim" in fields:
            start = parse_session_time(
                fields.get("dataHoraInicio") or session.starts_at, "dataHoraInicio"
            )
            end = parse_session_time(fields.get("dataHoraFim") or session.ends_at, "dataHoraFim")
            check_time_window(start, end)
            updates["starts_at"] = start
            updates["ends_at"] = end
        if fields.get("nome"):
            updates["label"] = fields["nome"].strip()
        if "notasSessao" in fields:
            updates["notes"] = fields["notasSessao"]
        if fields.get("notificacao") is not None:
            updates["notify"] = fields["notificacao"]
        if fields.get("status") is not None:
            updates["status"] = parse_status(fields["status"]).value

        return self.repo.update_session(self.db, session, **updates)

    def reschedule(
        self, session_id: int, new_start: TimestampInput, new_end: TimestampInput
    ) -> TherapySession:
        """Move a session to a new window; both bounds change in one commit"""
        start = parse_session_time(new_start, "dataHoraInicio")
        end = parse_session_time(new_end, "dataHoraFim")
        session = self.get_session(session_id)
        try:
            check_time_window(start, end)
        except ValidationError:
            logger.warning(f"⚠️ Rejected reschedule of session {session_id}: {start} -> {end}")
            raise

        session = self.repo.update_session(self.db, session, starts_at=start, ends_at=end)
        logger.info(f"🔁 Session {session_id} rescheduled to {start} - {end}")
        return session

    def set_status(self, session_id: int, new_status: Union[str, SessionStatus]) -> TherapySession:
        status = parse_status(new_status)
        session = self.get_session(session_id)
        session = self.repo.update_session(self.db, session, status=status.value)
        logger.info(f"🏷️ Session {session_id} status set to {status.value}")
        return session

