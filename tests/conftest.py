import pytest

from app.api.models.schemas import Trip, TripActivity, TripDay
from app.domain.models import HistoryState, TripState
from app.domain.repositories import LocalTripRepository
from app.domain.services.trip_service import TripService
from app.external.local_storage import InMemoryKeyValueStorage


def make_trip(trip_id: str, created_at: str, title: str = "Trip") -> Trip:
    return Trip(
        id=trip_id,
        createdAt=created_at,
        prompt=f"prompt for {trip_id}",
        tripTitle=title,
        totalBudget="₹5000",
        days=[
            TripDay(
                day=1,
                title="Day 1",
                activities=[
                    TripActivity(time="09:00", place="Cafe", description="Coffee", cost="₹200–400", mapQuery="Cafe"),
                    TripActivity(time="12:00", place="Fort", description="Walk", cost="₹0", mapQuery="Fort"),
                ],
            ),
            TripDay(day=2, title="Day 2", activities=[]),
        ],
    )


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def repo(storage):
    return LocalTripRepository(storage)


@pytest.fixture
def trip_state(repo):
    return TripState(repo=repo)


@pytest.fixture
def history():
    return HistoryState()


@pytest.fixture
def service(repo, trip_state, history):
    return TripService(repo=repo, trip_state=trip_state, history=history, page_size=2)
