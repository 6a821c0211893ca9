from unittest.mock import AsyncMock

import pytest
from conftest import make_trip
from fastapi.testclient import TestClient

from app.dependencies import get_history_state, get_trip_repo, get_trip_service, get_trip_state
from app.domain.services.trip_service import TripService
from app.main import app

PREFIX = "/api/v1"


@pytest.fixture
def client(repo, trip_state, history, service):
    app.dependency_overrides[get_trip_repo] = lambda: repo
    app.dependency_overrides[get_trip_state] = lambda: trip_state
    app.dependency_overrides[get_history_state] = lambda: history
    app.dependency_overrides[get_trip_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_generate_then_list_and_fetch(client):
    response = client.post(f"{PREFIX}/trips", json={"prompt": "3 days in Goa under 10000 with beaches"})

    assert response.status_code == 201
    trip = response.json()
    assert trip["totalBudget"] == "₹10000"
    assert len(trip["days"]) == 3

    page = client.get(f"{PREFIX}/trips", params={"limit": 5}).json()
    assert [t["id"] for t in page["trips"]] == [trip["id"]]
    assert page["nextCursor"] is None

    assert client.get(f"{PREFIX}/trips/{trip['id']}").json()["id"] == trip["id"]
    assert client.get(f"{PREFIX}/trips/latest").json()["id"] == trip["id"]
    assert client.get(f"{PREFIX}/planner").json()["currentTrip"]["id"] == trip["id"]


def test_empty_prompt_is_rejected(client):
    response = client.post(f"{PREFIX}/trips", json={"prompt": ""})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert response.json()["error"]["details"]["field"] == "prompt"


def test_generation_failure_maps_to_502(client, repo, trip_state, history):
    failing = TripService(
        repo=repo, trip_state=trip_state, history=history, generator=AsyncMock(side_effect=RuntimeError("x"))
    )
    app.dependency_overrides[get_trip_service] = lambda: failing

    response = client.post(f"{PREFIX}/trips", json={"prompt": "2 days in leh"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "GENERATION_FAILED"
    assert client.get(f"{PREFIX}/planner").json()["isLoading"] is False


def test_missing_trip_is_404(client):
    assert client.get(f"{PREFIX}/trips/nope").status_code == 404
    assert client.get(f"{PREFIX}/trips/latest").status_code == 404
    assert client.get(f"{PREFIX}/planner/budget").status_code == 404
    response = client.patch(f"{PREFIX}/planner/days/1/activities/0", json={"cost": "₹1"})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_edit_flow(client, repo):
    trip = client.post(f"{PREFIX}/trips", json={"prompt": "2 days in rishikesh"}).json()

    patched = client.patch(f"{PREFIX}/planner/days/1/activities/1", json={"cost": "₹250"}).json()
    assert patched["days"][0]["activities"][1]["cost"] == "₹250"
    assert patched["id"] == trip["id"]

    new_day = {"day": 2, "title": "Rest day", "activities": []}
    replaced = client.put(f"{PREFIX}/planner/days/2", json=new_day).json()
    assert replaced["days"][1]["title"] == "Rest day"

    regenerated = client.post(f"{PREFIX}/planner/days/2/regenerate").json()
    assert regenerated["days"][1]["title"] == "Day 2: Temples, ghats & yoga in Rishikesh"
    assert regenerated["days"][0]["activities"][1]["cost"] == "₹250"

    assert len(repo.read_all()) == 1
    assert client.get(f"{PREFIX}/planner/budget").json()["status"] == "Flexible budget"


def test_normalize_endpoint(client):
    response = client.post(
        f"{PREFIX}/trips/normalize",
        json={"prompt": "x", "payload": {"days": [{"day": 1, "activities": [{"place": "X"}]}]}},
    )

    assert response.status_code == 201
    assert response.json()["days"][0]["activities"][0]["mapQuery"] == "X"


def test_history_paging(client, repo):
    for i in range(3):
        repo.persist(make_trip(f"t{i}", f"2025-01-0{i + 1}T00:00:00.000Z"))

    first = client.post(f"{PREFIX}/history/first-page").json()
    assert len(first["trips"]) == 2
    assert first["hasMore"] is True

    second = client.post(f"{PREFIX}/history/next-page").json()
    assert len(second["trips"]) == 3
    assert second["hasMore"] is False
    assert [t["id"] for t in second["trips"]] == [t.id for t in repo.read_all()]


def test_open_trip_and_bootstrap(client, trip_state):
    created = client.post(f"{PREFIX}/trips", json={"prompt": "1 day in jaipur"}).json()
    trip_state.clear_trip()

    state = client.post(f"{PREFIX}/planner/bootstrap").json()
    assert state["currentTrip"]["id"] == created["id"]

    assert client.post(f"{PREFIX}/planner/open/{created['id']}").status_code == 200
    assert client.post(f"{PREFIX}/planner/open/missing").status_code == 404


def test_meta(client):
    vibes = [v["id"] for v in client.get(f"{PREFIX}/meta/vibes").json()]
    assert vibes == ["religious", "mountain", "beach", "city", "hill_station", "general"]

    destinations = {d["id"]: d for d in client.get(f"{PREFIX}/meta/destinations").json()}
    assert destinations["goa"]["travel"]["flight"] == "₹3k–8k"
    assert "gangtok" in destinations


def test_negative_activity_index_is_rejected(client):
    client.post(f"{PREFIX}/trips", json={"prompt": "1 day in goa"})

    response = client.patch(f"{PREFIX}/planner/days/1/activities/-1", json={"cost": "₹1"})

    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "index"
