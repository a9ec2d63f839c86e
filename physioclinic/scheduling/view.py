"""
Scheduling view - turns calendar gestures into session store calls.

Every drag, resize or status change runs as a ``Gesture`` that moves from
``idle`` to ``pending`` and ends ``committed`` or ``rolled_back``. The record
as it was before the gesture is captured up front and put back verbatim on
failure. A session stays busy while its gesture is pending; further gestures
on it are ignored until it resolves.
"""

import dataclasses
import enum
import inspect
import logging
from datetime import date, datetime
from typing import Awaitable, Callable, Optional, Union

from ..enums import SessionStatus
from ..errors import AuthError, ClinicError
from ..domain.sessions.rules import parse_status
from ..domain.sessions.store import SessionRecord, SessionStore
from ..shared.timeutils import clinic_today, to_clinic_local
from .calendar import CalendarEvent, CalendarView, snap_to_slot, to_event, visible_range
from .notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."


class UpdatePolicy(str, enum.Enum):
    CONFIRMED = "confirmed"  # view changes once the store accepts
    OPTIMISTIC = "optimistic"  # view changes at once, rolled back on failure


class GesturePhase(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class GestureKind(str, enum.Enum):
    DRAG = "drag"
    RESIZE = "resize"
    STATUS = "status"


# (success, failure) toast text per gesture
MESSAGES = {
    GestureKind.DRAG: (
        "Session rescheduled successfully!",
        "Could not reschedule the session. Please try again.",
    ),
    GestureKind.RESIZE: (
        "Session duration updated!",
        "Could not change the session duration. Please try again.",
    ),
    GestureKind.STATUS: (
        "Status updated to {status}!",
        "Could not update the status. Please try again.",
    ),
}


@dataclasses.dataclass
class Gesture:
    kind: GestureKind
    session_id: int
    before: SessionRecord
    proposed: SessionRecord
    phase: GesturePhase = GesturePhase.IDLE
    result: Optional[SessionRecord] = None
    error: Optional[ClinicError] = None


@dataclasses.dataclass
class StatusPicker:
    """Quick-action surface opened by clicking a session"""

    session_id: int
    current: SessionStatus
    options: tuple = tuple(SessionStatus)


NewSessionHandler = Callable[[datetime], Union[None, Awaitable[None]]]
AuthErrorHandler = Callable[[], Union[None, Awaitable[None]]]


async def _call(handler, *args) -> None:
    outcome = handler(*args)
    if inspect.isawaitable(outcome):
        await outcome


class SchedulingView:
    """State behind the weekly/daily calendar"""

    def __init__(
        self,
        store: SessionStore,
        notifier: Optional[Notifier] = None,
        policy: Union[str, UpdatePolicy] = UpdatePolicy.CONFIRMED,
        on_new_session: Optional[NewSessionHandler] = None,
        on_auth_error: Optional[AuthErrorHandler] = None,
    ):
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.policy = UpdatePolicy(policy)
        self.on_new_session = on_new_session
        self.on_auth_error = on_auth_error

        self.anchor: date = clinic_today()
        self.view = CalendarView.WEEK
        self.loading = False
        self.sessions: dict[int, SessionRecord] = {}
        self.busy: set[int] = set()
        self.picker: Optional[StatusPicker] = None
        self.last_gesture: Optional[Gesture] = None

    # ------------------------------------------------------------------
    # Loading and rendering
    # ------------------------------------------------------------------

    async def load(
        self, anchor: Optional[date] = None, view: Union[str, CalendarView, None] = None
    ) -> list[CalendarEvent]:
        """Fetch the sessions of the visible days"""
        self.anchor = anchor or self.anchor
        self.view = CalendarView(view) if view else self.view
        first, last = visible_range(self.anchor, self.view)

        self.loading = True
        try:
            records = await self.store.list_by_date_range(first, last)
        except AuthError:
            await self._handle_auth_error()
            return self.events()
        except ClinicError as e:
            logger.error(f"❌ Failed to load sessions {first} - {last}: {e}")
            self.notifier.error("Could not load the sessions. Please try again.")
            return self.events()
        finally:
            self.loading = False

        fresh = {record.id: record for record in records}
        # Pending gestures own their session until they resolve
        for session_id in self.busy:
            local = self.sessions.get(session_id)
            if local is not None and self._in_view(local):
                fresh[session_id] = local
            else:
                fresh.pop(session_id, None)
        self.sessions = fresh
        return self.events()

    def events(self) -> list[CalendarEvent]:
        ordered = sorted(self.sessions.values(), key=lambda s: (s.start, s.id))
        return [to_event(record, busy=record.id in self.busy) for record in ordered]

    def is_busy(self, session_id: int) -> bool:
        return session_id in self.busy

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    async def drag(self, session_id: int, drop_time: datetime) -> Optional[Gesture]:
        """Move a session to the dropped slot keeping its duration"""
        before = self._current(session_id)
        if before is None:
            return None
        new_start = snap_to_slot(to_clinic_local(drop_time))
        new_end = new_start + before.duration
        proposed = dataclasses.replace(before, start=new_start, end=new_end)
        return await self._run(
            GestureKind.DRAG,
            proposed,
            lambda: self.store.reschedule(session_id, new_start, new_end),
        )

    async def resize(self, session_id: int, new_end: datetime) -> Optional[Gesture]:
        """Change the end of a session; its start stays put"""
        before = self._current(session_id)
        if before is None:
            return None
        new_end = snap_to_slot(to_clinic_local(new_end))
        proposed = dataclasses.replace(before, end=new_end)
        return await self._run(
            GestureKind.RESIZE,
            proposed,
            lambda: self.store.reschedule(session_id, before.start, new_end),
        )

    def select(self, session_id: int) -> Optional[StatusPicker]:
        """Open the status picker for a session"""
        record = self._current(session_id)
        if record is None:
            return None
        self.picker = StatusPicker(session_id=session_id, current=record.status)
        return self.picker

    def close_picker(self) -> None:
        self.picker = None

    async def change_status(self, new_status: Union[str, SessionStatus]) -> Optional[Gesture]:
        """Apply a status from the open picker; the picker closes on success"""
        if self.picker is None:
            logger.warning("⚠️ Status change requested with no session selected")
            return None

        session_id = self.picker.session_id
        before = self._current(session_id)
        if before is None:
            return None
        try:
            status = parse_status(new_status)
        except ClinicError as e:
            logger.warning(f"⚠️ Status change of session {session_id} rejected: {e}")
            self.notifier.error(MESSAGES[GestureKind.STATUS][1])
            return None
        proposed = dataclasses.replace(before, status=status)

        gesture = await self._run(
            GestureKind.STATUS,
            proposed,
            lambda: self.store.set_status(session_id, status),
        )
        if gesture and gesture.phase is GesturePhase.COMMITTED:
            self.picker = None
        return gesture

    async def select_slot(self, slot_time: datetime) -> datetime:
        """
        Forward a "new session" request upstream with the slot start as hint.

        The view never creates sessions itself.
        """
        hint = snap_to_slot(slot_time)
        if self.on_new_session is None:
            logger.info(f"🗓️ Empty slot {hint} selected, no new-session handler attached")
        else:
            await _call(self.on_new_session, hint)
        return hint

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _in_view(self, record: SessionRecord) -> bool:
        first, last = visible_range(self.anchor, self.view)
        return first <= record.start.date() <= last

    def _place(self, record: SessionRecord) -> None:
        """Show ``record`` if it falls in the visible days, otherwise drop it"""
        if self._in_view(record):
            self.sessions[record.id] = record
        else:
            self.sessions.pop(record.id, None)

    def _current(self, session_id: int) -> Optional[SessionRecord]:
        if session_id in self.busy:
            logger.info(f"⏳ Session {session_id} is busy, gesture ignored")
            return None
        record = self.sessions.get(session_id)
        if record is None:
            logger.warning(f"⚠️ Session {session_id} is not in the current view")
        return record

    async def _run(
        self,
        kind: GestureKind,
        proposed: SessionRecord,
        mutation: Callable[[], Awaitable[SessionRecord]],
    ) -> Gesture:
        session_id = proposed.id
        gesture = Gesture(
            kind=kind,
            session_id=session_id,
            before=self.sessions[session_id],
            proposed=proposed,
        )
        self.last_gesture = gesture

        self.busy.add(session_id)
        gesture.phase = GesturePhase.PENDING
        if self.policy is UpdatePolicy.OPTIMISTIC:
            self._place(proposed)

        success_text, failure_text = MESSAGES[kind]
        try:
            result = await mutation()
        except AuthError as e:
            self._roll_back(gesture, e)
            await self._handle_auth_error()
        except ClinicError as e:
            self._roll_back(gesture, e)
            logger.error(f"❌ {kind.value} of session {session_id} failed: {e}")
            self.notifier.error(failure_text)
        except Exception:
            self._roll_back(gesture, None)
            raise
        else:
            self._place(result)
            gesture.result = result
            gesture.phase = GesturePhase.COMMITTED
            self.notifier.success(success_text.format(status=result.status.value))
        finally:
            self.busy.discard(session_id)

        return gesture

    def _roll_back(self, gesture: Gesture, error: Optional[ClinicError]) -> None:
        self._place(gesture.before)
        gesture.error = error
        gesture.phase = GesturePhase.ROLLED_BACK

    async def _handle_auth_error(self) -> None:
        self.notifier.error(SESSION_EXPIRED_MESSAGE)
        if self.on_auth_error is not None:
            await _call(self.on_auth_error)
