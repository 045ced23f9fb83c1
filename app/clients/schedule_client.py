"""HTTP client for the Schedule Service REST API.

Every failure, whether a transport error, a non-2xx status, or an
unreadable body, surfaces as ``PersistenceError`` carrying the server's
message unchanged. Nothing is retried.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logging import get_logger
from app.domain.errors import PersistenceError
from app.domain.models import ScheduleEntry, ScheduleEntryIn
from app.domain.weekdays import Weekday

log = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if message:
            return str(message)
    return response.text


class ScheduleClient:
    """Synchronous client for ``/groups/{group_id}/schedules``.

    Pass *http* to reuse an existing ``httpx.Client`` (tests hand in a
    FastAPI ``TestClient``); otherwise one is built from settings.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        if http is None:
            settings = get_settings()
            http = httpx.Client(
                base_url=base_url or settings.schedule_service_url,
                timeout=timeout or settings.request_timeout_seconds,
            )
        self._http = http

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ScheduleClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            log.warning(
                "schedule_service_unreachable", method=method, path=path, error=str(exc)
            )
            raise PersistenceError(str(exc)) from exc
        if response.is_error:
            message = _error_message(response)
            log.warning(
                "schedule_service_rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise PersistenceError(message, status_code=response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise PersistenceError(f"Malformed response: {exc}") from exc

    @staticmethod
    def _entry(payload: Any) -> ScheduleEntry:
        try:
            return ScheduleEntry.model_validate(payload)
        except ValidationError as exc:
            raise PersistenceError(f"Malformed schedule in response: {exc}") from exc

    @staticmethod
    def _body(data: ScheduleEntryIn) -> dict[str, Any]:
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_schedules(
        self, group_id: int, weekday: Weekday | None = None
    ) -> list[ScheduleEntry]:
        params = {"day": int(weekday)} if weekday is not None else None
        response = self._request("GET", f"/groups/{group_id}/schedules", params=params)
        items = self._json(response)
        if not isinstance(items, list):
            raise PersistenceError("Malformed response: expected a list of schedules")
        return [self._entry(item) for item in items]

    def create(self, group_id: int, data: ScheduleEntryIn) -> ScheduleEntry:
        response = self._request(
            "POST", f"/groups/{group_id}/schedules", json=self._body(data)
        )
        return self._entry(self._json(response))

    def update(
        self, group_id: int, schedule_id: int, data: ScheduleEntryIn
    ) -> ScheduleEntry:
        response = self._request(
            "PUT",
            f"/groups/{group_id}/schedules/{schedule_id}",
            json=self._body(data),
        )
        return self._entry(self._json(response))

    def delete(self, group_id: int, schedule_id: int) -> None:
        self._request("DELETE", f"/groups/{group_id}/schedules/{schedule_id}")
