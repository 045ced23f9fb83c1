"""API tests for the Schedule Service endpoints."""

from __future__ import annotations

import sys
import threading

import pytest
from fastapi.testclient import TestClient

from app.domain.errors import OverlapConflict
from app.domain.models import ScheduleEntryIn
from app.main import app, schedule_repo
from app.repos.memory import ScheduleRepository
from app.services.timeconv import format_minutes


@pytest.fixture(autouse=True)
def _clear_repo():
    """Reset the in-memory repo before each test."""
    schedule_repo.clear()
    yield
    schedule_repo.clear()


@pytest.fixture()
def client():
    return TestClient(app)


def _body(**overrides) -> dict:
    body = {
        "weekday": 0,
        "startTime": "09:00",
        "endTime": "10:00",
        "subjectId": 3,
        "teacherId": 8,
        "mode": "in_person",
    }
    body.update(overrides)
    return body


def test_create_returns_stored_entry(client: TestClient):
    resp = client.post("/groups/1/schedules", json=_body())
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] == 1
    assert data["groupId"] == 1
    assert data["weekday"] == 0
    assert data["startTime"] == "09:00"
    assert data["status"] == "active"


def test_create_accepts_legacy_payload(client: TestClient):
    resp = client.post(
        "/groups/1/schedules",
        json=_body(weekday="Miércoles", mode="Presencial"),
    )
    assert resp.status_code == 201
    assert resp.json()["weekday"] == 2
    assert resp.json()["mode"] == "in_person"


def test_list_filters_by_group_and_day(client: TestClient):
    client.post("/groups/1/schedules", json=_body())
    client.post("/groups/1/schedules", json=_body(weekday=1))
    client.post("/groups/2/schedules", json=_body())

    resp = client.get("/groups/1/schedules")
    assert [e["weekday"] for e in resp.json()] == [0, 1]

    resp = client.get("/groups/1/schedules", params={"day": 1})
    assert len(resp.json()) == 1
    assert resp.json()[0]["weekday"] == 1

    resp = client.get("/groups/1/schedules", params={"day": "lunes"})
    assert [e["weekday"] for e in resp.json()] == [0]


def test_list_rejects_unknown_day(client: TestClient):
    resp = client.get("/groups/1/schedules", params={"day": "someday"})
    assert resp.status_code == 422
    assert "someday" in resp.json()["message"]


def test_contiguous_classes_allowed(client: TestClient):
    assert client.post("/groups/1/schedules", json=_body()).status_code == 201
    resp = client.post(
        "/groups/1/schedules", json=_body(startTime="10:00", endTime="11:00")
    )
    assert resp.status_code == 201


def test_overlap_rejected_with_409(client: TestClient):
    client.post("/groups/1/schedules", json=_body(endTime="10:30"))
    resp = client.post(
        "/groups/1/schedules", json=_body(startTime="10:00", endTime="11:00")
    )
    assert resp.status_code == 409
    assert resp.json()["conflictingIds"] == [1]
    assert "overlaps" in resp.json()["message"]


def test_overlap_in_other_group_is_allowed(client: TestClient):
    client.post("/groups/1/schedules", json=_body())
    assert client.post("/groups/2/schedules", json=_body()).status_code == 201


@pytest.mark.parametrize(
    "overrides",
    [
        {"startTime": "9:00"},
        {"endTime": "24:00"},
        {"startTime": "10:00", "endTime": "10:00"},
        {"startTime": "11:00", "endTime": "10:00"},
    ],
)
def test_invalid_times_rejected_with_422(client: TestClient, overrides):
    resp = client.post("/groups/1/schedules", json=_body(**overrides))
    assert resp.status_code == 422
    assert resp.json()["message"]


def test_missing_fields_rejected(client: TestClient):
    resp = client.post("/groups/1/schedules", json={"weekday": 0})
    assert resp.status_code == 422
    assert resp.json()["message"] == "Validation error"


def test_update_excludes_itself(client: TestClient):
    client.post("/groups/1/schedules", json=_body())
    resp = client.put(
        "/groups/1/schedules/1", json=_body(startTime="09:30", endTime="10:30")
    )
    assert resp.status_code == 200
    assert resp.json()["startTime"] == "09:30"


def test_update_into_other_class_rejected(client: TestClient):
    client.post("/groups/1/schedules", json=_body())
    client.post("/groups/1/schedules", json=_body(startTime="11:00", endTime="12:00"))
    resp = client.put(
        "/groups/1/schedules/2", json=_body(startTime="09:30", endTime="11:30")
    )
    assert resp.status_code == 409
    assert resp.json()["conflictingIds"] == [1]


def test_update_unknown_or_foreign_schedule(client: TestClient):
    assert client.put("/groups/1/schedules/99", json=_body()).status_code == 404
    client.post("/groups/1/schedules", json=_body())
    assert client.put("/groups/2/schedules/1", json=_body()).status_code == 403


def test_delete(client: TestClient):
    client.post("/groups/1/schedules", json=_body())
    assert client.delete("/groups/2/schedules/1").status_code == 403
    resp = client.delete("/groups/1/schedules/1")
    assert resp.status_code == 200
    assert client.get("/groups/1/schedules").json() == []
    assert client.delete("/groups/1/schedules/1").status_code == 404


def test_concurrent_conflicting_writes_store_one():
    """Writers racing on the same slot: the store accepts exactly one."""
    repo = ScheduleRepository()
    data = ScheduleEntryIn(
        weekday=0, start_time="09:00", end_time="10:00", subject_id=1
    )
    barrier = threading.Barrier(8)
    results: list[str] = []

    def _write() -> None:
        barrier.wait()
        try:
            repo.create(1, data)
            results.append("ok")
        except OverlapConflict:
            results.append("conflict")

    threads = [threading.Thread(target=_write) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("conflict") == 7
    assert len(repo.list_for_group(1)) == 1


def test_listing_while_writing_never_fails():
    """Reads taken during a stream of writes see a consistent store."""
    repo = ScheduleRepository()
    errors: list[RuntimeError] = []
    done = threading.Event()

    def _read() -> None:
        while not done.is_set():
            try:
                repo.list_for_group(1)
            except RuntimeError as exc:
                errors.append(exc)
                return

    old_interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    reader = threading.Thread(target=_read)
    reader.start()
    try:
        for i in range(2000):
            start = format_minutes(i % 1380)
            repo.create(
                1 + i // 1380,
                ScheduleEntryIn(
                    weekday=i % 7,
                    start_time=start,
                    end_time=format_minutes(i % 1380 + 1),
                    subject_id=1,
                ),
            )
    finally:
        done.set()
        reader.join()
        sys.setswitchinterval(old_interval)

    assert errors == []
    assert len(repo.list_for_group(1)) == 1380
