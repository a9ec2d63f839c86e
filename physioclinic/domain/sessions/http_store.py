"""Session store that talks to the ``/sessoes`` REST API over httpx"""

import logging
from typing import Any, Optional, Union

import httpx

from ...enums import SessionStatus
from ...errors import AuthError, NotFoundError, TransportError, ValidationError
from ...shared.timeutils import TimestampInput, parse_timestamp, to_wire
from .rules import parse_session_time, parse_status
from .store import SessionRecord

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    return str(detail or body)


def raise_for_response(response: httpx.Response) -> None:
    """Translate an error response into the domain error taxonomy"""
    code = response.status_code
    if code < 400:
        return
    if code == 401:
        raise AuthError(_detail(response))
    if code == 404:
        raise NotFoundError(_detail(response))
    if code in (400, 422):
        raise ValidationError(_detail(response))
    raise TransportError(f"Server error {code}: {_detail(response)}")


class HttpSessionStore:
    """
    ``SessionStore`` over HTTP.

    The bearer token is attached when present. No retries are attempted;
    the caller decides whether to re-trigger an action.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {path} failed: {e}")
            raise TransportError(f"Could not reach the server: {e}") from e

        raise_for_response(response)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"❌ {method} {path} returned a non-JSON body ({response.status_code})")
            raise TransportError("Unexpected response from the server") from e

    async def list_by_date_range(
        self, start: TimestampInput, end: TimestampInput
    ) -> list[SessionRecord]:
        params = {"inicio": _bound(start), "fim": _bound(end)}
        data = await self._request("GET", "/sessoes", params=params)
        return [SessionRecord.from_wire(item) for item in data]

    async def list_by_patient(self, patient_id: int) -> list[SessionRecord]:
        data = await self._request("GET", f"/sessoes/cliente/{patient_id}")
        return [SessionRecord.from_wire(item) for item in data]

    async def get(self, session_id: int) -> SessionRecord:
        return SessionRecord.from_wire(await self._request("GET", f"/sessoes/{session_id}"))

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
        payload = {
            "clienteId": patient_id,
            "dataHoraInicio": to_wire(parse_session_time(start, "start")),
            "dataHoraFim": to_wire(parse_session_time(end, "end")),
            "nome": label,
            "status": parse_status(status).value,
            "notasSessao": notes,
            "notificacao": notify,
        }
        return SessionRecord.from_wire(await self._request("POST", "/sessoes", json=payload))

    async def reschedule(
        self, session_id: int, new_start: TimestampInput, new_end: TimestampInput
    ) -> SessionRecord:
        payload = {
            "dataHoraInicio": to_wire(parse_session_time(new_start, "new_start")),
            "dataHoraFim": to_wire(parse_session_time(new_end, "new_end")),
        }
        data = await self._request("PATCH", f"/sessoes/{session_id}/mover", json=payload)
        return SessionRecord.from_wire(data)

    async def set_status(
        self, session_id: int, new_status: Union[str, SessionStatus]
    ) -> SessionRecord:
        status = new_status.value if isinstance(new_status, SessionStatus) else str(new_status)
        data = await self._request("PATCH", f"/sessoes/{session_id}/status", json={"status": status})
        return SessionRecord.from_wire(data)


def _bound(value: TimestampInput) -> str:
    if isinstance(value, str):
        return value
    if hasattr(value, "hour"):
        return to_wire(parse_timestamp(value))
    return value.isoformat()
