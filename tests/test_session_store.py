import asyncio
from datetime import date, datetime, timedelta

import pytest

from physioclinic.enums import SessionStatus
from physioclinic.errors import InvalidRangeError, NotFoundError, ValidationError
from physioclinic.domain.sessions.store import InMemorySessionStore, SessionRecord


def record(session_id, start, hours=1, status=SessionStatus.SCHEDULED, patient_id=1):
    return SessionRecord(
        id=session_id,
        patient_id=patient_id,
        label=f"Session {session_id}",
        start=start,
        end=start + timedelta(hours=hours),
        status=status,
    )


@pytest.fixture
def store():
    return InMemorySessionStore(
        [
            record(1, datetime(2024, 6, 4, 15, 0)),
            record(2, datetime(2024, 6, 3, 8, 0)),
            record(3, datetime(2024, 6, 5, 9, 0), patient_id=2),
        ],
        patient_names={1: "Maria Silva", 2: "Roberto Costa"},
    )


def test_range_is_inclusive_and_ascending(store):
    found = asyncio.run(store.list_by_date_range("2024-06-03", "2024-06-04"))

    assert [s.id for s in found] == [2, 1]


def test_range_start_after_end(store):
    with pytest.raises(InvalidRangeError) as excinfo:
        asyncio.run(store.list_by_date_range("2024-06-05", "2024-06-03"))

    assert isinstance(excinfo.value, NotFoundError)


def test_reschedule_replaces_both_bounds(store):
    moved = asyncio.run(
        store.reschedule(2, datetime(2024, 6, 3, 10, 0), datetime(2024, 6, 3, 11, 0))
    )

    assert moved.start == datetime(2024, 6, 3, 10, 0)
    assert moved.duration == timedelta(hours=1)
    assert asyncio.run(store.get(2)) == moved


def test_invalid_reschedule_keeps_record(store):
    before = asyncio.run(store.get(2))

    with pytest.raises(ValidationError):
        asyncio.run(store.reschedule(2, datetime(2024, 6, 3, 10, 0), datetime(2024, 6, 3, 10, 0)))

    assert asyncio.run(store.get(2)) == before


def test_malformed_timestamp_is_validation_error(store):
    before = asyncio.run(store.get(2))

    with pytest.raises(ValidationError, match="not a valid timestamp"):
        asyncio.run(store.reschedule(2, "not-a-time", "2024-06-03T10:00:00"))
    with pytest.raises(ValidationError):
        asyncio.run(store.create(1, "2024-06-06T08:00:00", "tomorrow"))

    assert asyncio.run(store.get(2)) == before


def test_reschedule_stores_whole_seconds(store):
    moved = asyncio.run(
        store.reschedule(2, datetime(2024, 6, 3, 10, 0, 0, 250000), "2024-06-03T11:00:00.999")
    )

    assert moved.start == datetime(2024, 6, 3, 10, 0)
    assert moved.end == datetime(2024, 6, 3, 11, 0)
    assert SessionRecord.from_wire(moved.to_wire()) == moved


def test_unknown_session(store):
    with pytest.raises(NotFoundError):
        asyncio.run(store.reschedule(99, datetime(2024, 6, 3, 10, 0), datetime(2024, 6, 3, 11, 0)))
    with pytest.raises(NotFoundError):
        asyncio.run(store.set_status(99, "COMPLETED"))


def test_set_status_validates_value(store):
    with pytest.raises(ValidationError):
        asyncio.run(store.set_status(1, "DONE"))

    updated = asyncio.run(store.set_status(1, "NO_SHOW"))
    assert updated.status is SessionStatus.NO_SHOW


def test_create_uses_default_label_and_next_id(store):
    created = asyncio.run(store.create(2, "2024-06-06T08:00:00", "2024-06-06T09:00:00"))

    assert created.id == 4
    assert created.label == "Roberto Costa - Physiotherapy"
    assert created.status is SessionStatus.SCHEDULED


def test_create_for_unknown_patient(store):
    with pytest.raises(NotFoundError):
        asyncio.run(store.create(7, "2024-06-06T08:00:00", "2024-06-06T09:00:00"))


def test_list_by_patient(store):
    assert {s.id for s in asyncio.run(store.list_by_patient(1))} == {1, 2}


def test_concurrent_mutations_are_applied_whole():
    store = InMemorySessionStore([record(1, datetime(2024, 6, 3, 8, 0))], latency=0.01)

    async def run():
        await asyncio.gather(
            store.reschedule(1, datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 10, 0)),
            store.reschedule(1, datetime(2024, 6, 3, 14, 0), datetime(2024, 6, 3, 16, 0)),
            store.set_status(1, SessionStatus.COMPLETED),
        )
        return await store.get(1)

    final = asyncio.run(run())

    assert (final.start, final.end) in {
        (datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 10, 0)),
        (datetime(2024, 6, 3, 14, 0), datetime(2024, 6, 3, 16, 0)),
    }
    assert final.status is SessionStatus.COMPLETED


def test_demo_week_store():
    store = InMemorySessionStore.with_demo_week(today=date(2024, 6, 5))

    sessions = asyncio.run(store.list_by_date_range("2024-06-03", "2024-06-09"))

    assert 10 <= len(sessions) <= 25
    assert all(s.end > s.start for s in sessions)


def test_wire_round_trip_uses_api_field_names():
    snapshot = record(5, datetime(2024, 6, 3, 8, 0))

    wire = snapshot.to_wire()

    assert wire["clienteId"] == 1
    assert wire["dataHoraInicio"] == "2024-06-03T08:00:00"
    assert SessionRecord.from_wire(wire) == snapshot


def test_list_all_is_ascending(store):
    assert [s.id for s in asyncio.run(store.list_all())] == [2, 1, 3]
