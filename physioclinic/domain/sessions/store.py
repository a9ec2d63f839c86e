"""
Client-side session stores.

``SessionStore`` is the async contract the scheduling view depends on. Two
implementations exist: ``InMemorySessionStore`` (the mock layer, also used by
tests) and ``HttpSessionStore`` in ``http_store.py`` which talks to the
``/sessoes`` API.
"""

import asyncio
import dataclasses
import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional, Protocol, Union

from ...enums import SessionStatus
from ...errors import NotFoundError, ValidationError
from ...shared.timeutils import TimestampInput, parse_range_bound, parse_timestamp, to_wire
from .rules import (
    check_range,
    check_time_window,
    default_label,
    parse_session_time,
    parse_status,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class SessionRecord:
    """Immutable snapshot of a session as seen by a client"""

    id: int
    patient_id: int
    label: str
    start: datetime
    end: datetime
    status: SessionStatus = SessionStatus.SCHEDULED
    notes: Optional[str] = None
    notify: bool = False

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "SessionRecord":
        return cls(
            id=int(data["id"]),
            patient_id=int(data["clienteId"]),
            label=data.get("nome") or "",
            start=parse_timestamp(data["dataHoraInicio"]),
            end=parse_timestamp(data["dataHoraFim"]),
            status=SessionStatus(data.get("status") or SessionStatus.SCHEDULED.value),
            notes=data.get("notasSessao"),
            notify=bool(data.get("notificacao", False)),
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "clienteId": self.patient_id,
            "nome": self.label,
            "dataHoraInicio": to_wire(self.start),
            "dataHoraFim": to_wire(self.end),
            "status": self.status.value,
            "notasSessao": self.notes,
            "notificacao": self.notify,
        }


class SessionStore(Protocol):
    async def list_by_date_range(
        self, start: TimestampInput, end: TimestampInput
    ) -> list[SessionRecord]: ...

    async def list_by_patient(self, patient_id: int) -> list[SessionRecord]: ...

    async def get(self, session_id: int) -> SessionRecord: ...

    async def create(
        self,
        patient_id: int,
        start: TimestampInput,
        end: TimestampInput,
        label: Optional[str] = None,
        status: Union[str, SessionStatus] = SessionStatus.SCHEDULED,
        notes: Optional[str] = None,
        notify: bool = False,
    ) -> SessionRecord: ...

    async def reschedule(
        self, session_id: int, new_start: TimestampInput, new_end: TimestampInput
    ) -> SessionRecord: ...

    async def set_status(
        self, session_id: int, new_status: Union[str, SessionStatus]
    ) -> SessionRecord: ...


class InMemorySessionStore:
    """
    Session store backed by a dict, standing in for the REST service.

    Mutations hold a lock for their whole read-validate-write cycle so callers
    never observe a half-applied change. Reads do not take the lock.
    ``latency`` simulates a network round trip (seconds) on every call.
    """

    def __init__(
        self,
        sessions: Iterable[SessionRecord] = (),
        latency: float = 0.0,
        patient_names: Optional[dict[int, str]] = None,
    ):
        self._sessions: dict[int, SessionRecord] = {s.id: s for s in sessions}
        self._next_id = max(self._sessions, default=0) + 1
        self._lock = asyncio.Lock()
        self.latency = latency
        # When set, create() rejects unknown patients
        self.patient_names = patient_names

    @classmethod
    def with_demo_week(cls, today: Optional[date] = None, seed: int = 7, **kwargs):
        """Store pre-filled with the demo patients and a week of sessions"""
        from ...demo_data import DEMO_PATIENTS, generate_demo_week

        records = [
            SessionRecord(
                id=index,
                patient_id=s["patient_id"],
                label=s["label"],
                start=s["start"],
                end=s["end"],
                status=s["status"],
                notes=s["notes"],
                notify=True,
            )
            for index, s in enumerate(generate_demo_week(today=today, seed=seed), start=1)
        ]
        names = {p["id"]: p["full_name"] for p in DEMO_PATIENTS}
        return cls(records, patient_names=names, **kwargs)

    async def _pause(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)

    def _require(self, session_id: int) -> SessionRecord:
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    async def list_by_date_range(
        self, start: TimestampInput, end: TimestampInput
    ) -> list[SessionRecord]:
        await self._pause()
        try:
            start_dt = parse_range_bound(start)
            end_dt = parse_range_bound(end, end=True)
        except ValueError as e:
            raise ValidationError(f"Malformed date range: {start} - {end}") from e
        check_range(start_dt, end_dt)
        matches = [s for s in self._sessions.values() if start_dt <= s.start <= end_dt]
        return sorted(matches, key=lambda s: (s.start, s.id))

    async def list_by_patient(self, patient_id: int) -> list[SessionRecord]:
        await self._pause()
        return [s for s in self._sessions.values() if s.patient_id == patient_id]

    async def list_all(self) -> list[SessionRecord]:
        await self._pause()
        return sorted(self._sessions.values(), key=lambda s: (s.start, s.id))

    async def get(self, session_id: int) -> SessionRecord:
        await self._pause()
        return self._require(session_id)

    async def create(
        self,
        patient_id: int,
        start: TimestampInput,
        end: TimestampInput,
        label: Optional[str] = None,
        status: Union[str, SessionStatus] = SessionStatus.SCHEDULED,
        notes: Optional[str] = None,
        notify: bool = False,
    ) -> SessionRecord:
        async with self._lock:
            await self._pause()
            if self.patient_names is not None and patient_id not in self.patient_names:
                raise NotFoundError(f"Patient {patient_id} not found")
            start_dt = parse_session_time(start, "start")
            end_dt = parse_session_time(end, "end")
            check_time_window(start_dt, end_dt)
            if not label and self.patient_names is not None:
                label = default_label(self.patient_names[patient_id])

            record = SessionRecord(
                id=self._next_id,
                patient_id=patient_id,
                label=label or "",
                start=start_dt,
                end=end_dt,
                status=parse_status(status),
                notes=notes,
                notify=notify,
            )
            self._sessions[record.id] = record
            self._next_id += 1
            logger.info(f"📅 Session {record.id} scheduled for patient {patient_id} at {start_dt}")
            return record

    async def reschedule(
        self, session_id: int, new_start: TimestampInput, new_end: TimestampInput
    ) -> SessionRecord:
        async with self._lock:
            await self._pause()
            current = self._require(session_id)
            start_dt = parse_session_time(new_start, "new_start")
            end_dt = parse_session_time(new_end, "new_end")
            check_time_window(start_dt, end_dt)
            updated = dataclasses.replace(current, start=start_dt, end=end_dt)
            self._sessions[session_id] = updated
            logger.info(f"🔁 Session {session_id} rescheduled to {start_dt} - {end_dt}")
            return updated

    async def set_status(
        self, session_id: int, new_status: Union[str, SessionStatus]
    ) -> SessionRecord:
        async with self._lock:
            await self._pause()
            status = parse_status(new_status)
            current = self._require(session_id)
            updated = dataclasses.replace(current, status=status)
            self._sessions[session_id] = updated
            logger.info(f"🏷️ Session {session_id} status set to {status.value}")
            return updated
