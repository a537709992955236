"""
Unit tests for the HTTP surface, with the database and poller overridden.
"""

import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from forecast.database import get_session
from forecast.main import app
from forecast.models.housing_models import Room
from forecast.models.snapshot_models import Snapshot
from forecast.scheduler.jobs import get_poller
from forecast.scheduler.poller import Poller


@pytest.fixture
def poller():
    return Poller(cycle=lambda: None, interval=60)


@pytest.fixture
def client(engine, poller):
    def _session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_poller] = lambda: poller
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(session, store):
    store.add_all(
        [
            Snapshot(id=uuid.uuid4(), date=date(2026, 3, 1), location="Tampa", room_occupancy_count=4, user_count=3),
            Snapshot(id=uuid.uuid4(), date=date(2026, 3, 2), location="Reston", room_occupancy_count=2, user_count=2),
        ]
    )
    store.commit()


class TestSnapshotRoutes:

    def test_list_all(self, client, seeded):
        body = client.get("/snapshots").json()
        assert body["count"] == 2

    def test_filter_by_date(self, client, seeded):
        body = client.get("/snapshots", params={"date": "2026-03-02"}).json()
        assert [r["location"] for r in body["results"]] == ["Reston"]

    def test_filter_by_range(self, client, seeded):
        body = client.get("/snapshots", params={"start": "2026-03-01", "end": "2026-03-01"}).json()
        assert [r["location"] for r in body["results"]] == ["Tampa"]

    def test_half_open_range_is_rejected(self, client):
        assert client.get("/snapshots", params={"start": "2026-03-01"}).status_code == 400

    def test_inverted_range_is_rejected(self, client):
        resp = client.get("/snapshots", params={"start": "2026-03-05", "end": "2026-03-01"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("path", ["/snapshots", "/snapshots/locations/Tampa"])
    def test_date_with_range_is_rejected(self, client, seeded, path):
        resp = client.get(
            path, params={"date": "2026-03-01", "start": "2026-03-01", "end": "2026-03-02"}
        )
        assert resp.status_code == 400

    def test_snapshot_dates_serialise_as_days(self, client, seeded):
        body = client.get("/snapshots/locations/Reston").json()
        assert body["results"][0]["date"] == "2026-03-02"

    def test_locations(self, client, seeded):
        assert client.get("/snapshots/locations").json()["locations"] == ["Reston", "Tampa"]

    def test_by_location(self, client, seeded):
        body = client.get("/snapshots/locations/Tampa").json()
        assert body["count"] == 1
        assert body["results"][0]["user_count"] == 3

    def test_run_on_demand(self, client, store):
        store.add(Room(room_id=uuid.uuid4(), location="Dallas", occupancy=5))
        store.commit()

        body = client.post("/snapshots/run", params={"date": "2026-03-02"}).json()

        assert body["count"] == 1
        assert body["results"][0]["location"] == "Dallas"
        assert body["results"][0]["room_occupancy_count"] == 5


class TestSystemRoutes:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_poller_status(self, client):
        body = client.get("/poller/status").json()
        assert body["state"] == "stopped"
        assert body["cycles_completed"] == 0
