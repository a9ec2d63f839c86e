import asyncio
from datetime import datetime

import httpx
import pytest

from physioclinic.domain.sessions.http_store import HttpSessionStore
from physioclinic.enums import SessionStatus
from physioclinic.errors import AuthError, NotFoundError, TransportError, ValidationError
from physioclinic.main import app


@pytest.fixture
def api_store(override_db, token):
    return HttpSessionStore("http://testserver", token=token, transport=httpx.ASGITransport(app=app))


@pytest.fixture
def patient_id(client, create_patient):
    return create_patient("Maria Silva")["id"]


def test_create_list_and_reschedule_over_http(api_store, patient_id):
    async def run():
        created = await api_store.create(patient_id, "2024-06-03T08:00:00", "2024-06-03T09:00:00")
        listed = await api_store.list_by_date_range("2024-06-03", "2024-06-03")
        moved = await api_store.reschedule(
            created.id, datetime(2024, 6, 3, 10, 0), datetime(2024, 6, 3, 11, 0)
        )
        status = await api_store.set_status(created.id, SessionStatus.NO_SHOW)
        return created, listed, moved, status

    created, listed, moved, status = asyncio.run(run())

    assert created.label == "Maria Silva - Physiotherapy"
    assert [s.id for s in listed] == [created.id]
    assert moved.start == datetime(2024, 6, 3, 10, 0)
    assert moved.end == datetime(2024, 6, 3, 11, 0)
    assert status.status is SessionStatus.NO_SHOW


def test_errors_map_to_domain_taxonomy(api_store, patient_id):
    with pytest.raises(NotFoundError):
        asyncio.run(api_store.get(999))
    with pytest.raises(ValidationError):
        asyncio.run(api_store.create(patient_id, "2024-06-03T09:00:00", "2024-06-03T08:00:00"))
    with pytest.raises(NotFoundError):
        asyncio.run(api_store.list_by_date_range("2024-06-05", "2024-06-03"))


def test_missing_token_is_auth_error(override_db):
    store = HttpSessionStore("http://testserver", transport=httpx.ASGITransport(app=app))

    with pytest.raises(AuthError):
        asyncio.run(store.list_by_patient(1))


def test_server_error_is_transport_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, json={"detail": "down"}))
    store = HttpSessionStore("http://clinic.test", token="t", transport=transport)

    with pytest.raises(TransportError, match="503"):
        asyncio.run(store.get(1))


def test_connection_failure_is_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = HttpSessionStore("http://clinic.test", transport=httpx.MockTransport(refuse))

    with pytest.raises(TransportError):
        asyncio.run(store.get(1))


def test_bearer_token_and_range_params_are_sent():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    store = HttpSessionStore("http://clinic.test/", token="abc", transport=httpx.MockTransport(handler))

    assert asyncio.run(store.list_by_date_range(datetime(2024, 6, 3, 8, 0), "2024-06-04")) == []
    assert seen["auth"] == "Bearer abc"
    assert seen["params"] == {"inicio": "2024-06-03T08:00:00", "fim": "2024-06-04"}


def test_non_json_success_body_is_transport_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>"))
    store = HttpSessionStore("http://clinic.test", token="t", transport=transport)

    with pytest.raises(TransportError):
        asyncio.run(store.reschedule(1, "2024-06-03T10:00:00", "2024-06-03T11:00:00"))


def test_malformed_timestamp_is_rejected_before_sending():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    store = HttpSessionStore("http://clinic.test", token="t", transport=httpx.MockTransport(handler))

    with pytest.raises(ValidationError):
        asyncio.run(store.reschedule(1, "not-a-time", "2024-06-03T11:00:00"))
    assert calls == []
