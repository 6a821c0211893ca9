from fastapi import Depends

from app.core.config import settings
from app.domain.models import HistoryState, TripState
from app.domain.repositories import LocalTripRepository, TripRepository
from app.domain.services.trip_service import TripService
from app.external.local_storage import get_local_storage

# One logical client per process: a single store plus its two state slices.
_repo: TripRepository = LocalTripRepository(get_local_storage(), storage_key=settings.storage_key)
_trip_state = TripState(repo=_repo)
_history = HistoryState()


def get_trip_repo() -> TripRepository:
    return _repo


def get_trip_state() -> TripState:
    return _trip_state


def get_history_state() -> HistoryState:
    return _history


def get_trip_service(
    repo: TripRepository = Depends(get_trip_repo),
    trip_state: TripState = Depends(get_trip_state),
    history: HistoryState = Depends(get_history_state),
) -> TripService:
    return TripService(repo=repo, trip_state=trip_state, history=history, page_size=settings.history_page_size)


__all__ = [
    "get_trip_repo",
    "get_trip_state",
    "get_history_state",
    "get_trip_service",
    "settings",
]
