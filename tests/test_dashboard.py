from datetime import date, datetime, timedelta

from physioclinic.domain.dashboard.stats import completion_rate, compute_stats
from physioclinic.domain.sessions.store import SessionRecord
from physioclinic.enums import SessionStatus
from physioclinic.shared.timeutils import clinic_today

WEDNESDAY = date(2024, 6, 5)


def session(session_id, start, status=SessionStatus.SCHEDULED):
    return SessionRecord(session_id, 1, "Maria Silva", start, start + timedelta(hours=1), status)


def test_empty_set_has_zero_rate():
    stats = compute_stats([], WEDNESDAY, total_patients=0)

    assert stats.completion_rate == 0
    assert stats.sessions_today == 0
    assert stats.sessions_this_week == 0


def test_counts_today_and_week():
    sessions = [
        session(1, datetime(2024, 6, 5, 8, 0), SessionStatus.COMPLETED),
        session(2, datetime(2024, 6, 5, 17, 0)),
        session(3, datetime(2024, 6, 3, 9, 0), SessionStatus.COMPLETED),
        session(4, datetime(2024, 6, 9, 23, 0), SessionStatus.CANCELED),
        session(5, datetime(2024, 6, 10, 8, 0)),
        session(6, datetime(2024, 6, 2, 8, 0), SessionStatus.NO_SHOW),
    ]

    stats = compute_stats(sessions, WEDNESDAY, total_patients=5)

    assert stats.total_patients == 5
    assert stats.sessions_today == 2
    assert stats.sessions_this_week == 4
    assert stats.completion_rate == 33


def test_rate_is_rounded():
    sessions = [
        session(1, datetime(2024, 6, 5, 8, 0), SessionStatus.COMPLETED),
        session(2, datetime(2024, 6, 5, 9, 0), SessionStatus.COMPLETED),
        session(3, datetime(2024, 6, 5, 10, 0), SessionStatus.NO_SHOW),
    ]

    assert completion_rate(sessions) == 67


def test_statistics_endpoint(client, create_patient, create_session):
    patient = create_patient()
    create_patient("Roberto Costa")
    today = clinic_today().isoformat()
    done = create_session(patient["id"], f"{today}T08:00:00", f"{today}T09:00:00")
    create_session(patient["id"], f"{today}T10:00:00", f"{today}T11:00:00")
    client.patch(f"/sessoes/{done['id']}/status", json={"status": "COMPLETED"})

    stats = client.get("/dashboard/estatisticas").json()

    assert stats == {"totalClientes": 2, "sessoesHoje": 2, "sessoesSemana": 2, "taxaConclusao": 50}


def test_statistics_window_needs_both_bounds(client):
    assert client.get("/dashboard/estatisticas", params={"fim": "2024-06-03"}).status_code == 422


def test_sessions_today_are_ascending(client, create_patient, create_session):
    patient = create_patient()
    today = clinic_today()
    tomorrow = today + timedelta(days=1)
    late = create_session(patient["id"], f"{today}T16:00:00", f"{today}T17:00:00")
    early = create_session(patient["id"], f"{today}T07:00:00", f"{today}T08:00:00")
    create_session(patient["id"], f"{tomorrow}T07:00:00", f"{tomorrow}T08:00:00")

    listed = client.get("/dashboard/sessoes-hoje").json()

    assert [s["id"] for s in listed] == [early["id"], late["id"]]
