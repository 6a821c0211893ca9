from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from app.api.models.schemas import ActivityPatch, HistoryView, Trip, TripActivity, TripDay, TripStateView
from app.domain.repositories import TripRepository


@dataclass
class TripState:
    """The trip checked out for editing. Every change is written through to the repository."""

    repo: TripRepository
    current_trip: Optional[Trip] = None
    is_loading: bool = False
    error: Optional[str] = None

    def set_trip(self, trip: Trip) -> None:
        self.repo.persist(trip)
        self.current_trip = trip
        self.error = None

    def clear_trip(self) -> None:
        self.current_trip = None

    def set_loading(self, value: bool) -> None:
        self.is_loading = value

    def set_error(self, message: Optional[str]) -> None:
        self.error = message

    def update_activity(self, day_number: int, activity_index: int, patch: ActivityPatch) -> Optional[Trip]:
        if self.current_trip is None:
            return None
        # Explicit nulls are ignored except photoSpot, which null clears.
        changes = {
            key: value
            for key, value in patch.model_dump(exclude_unset=True).items()
            if value is not None or key == "photoSpot"
        }
        days: List[TripDay] = []
        for day in self.current_trip.days:
            if day.day == day_number:
                activities = [
                    TripActivity.model_validate({**activity.model_dump(), **changes})
                    if idx == activity_index
                    else activity
                    for idx, activity in enumerate(day.activities)
                ]
                day = day.model_copy(update={"activities": activities})
            days.append(day)
        return self._commit(days)

    def replace_day(self, day_number: int, new_day: TripDay) -> Optional[Trip]:
        if self.current_trip is None:
            return None
        days = [new_day if day.day == day_number else day for day in self.current_trip.days]
        return self._commit(days)

    def _commit(self, days: List[TripDay]) -> Trip:
        updated = self.current_trip.model_copy(update={"days": days})
        self.repo.persist(updated)
        self.current_trip = updated
        return updated

    def to_view(self) -> TripStateView:
        return TripStateView(currentTrip=self.current_trip, isLoading=self.is_loading, error=self.error)


@dataclass
class HistoryState:
    trips: List[Trip] = field(default_factory=list)
    has_more: bool = True
    next_cursor: Optional[str] = None
    is_fetching: bool = False
    initialized: bool = False

    def set_initial_page(self, trips: List[Trip], next_cursor: Optional[str]) -> None:
        self.trips = list(trips)
        self.next_cursor = next_cursor
        self.has_more = bool(next_cursor)
        self.initialized = True

    def append_page(self, trips: List[Trip], next_cursor: Optional[str]) -> None:
        self.trips = [*self.trips, *trips]
        self.next_cursor = next_cursor
        self.has_more = bool(next_cursor)

    def add_trip_to_top(self, trip: Trip) -> None:
        # Moves an existing entry to the front rather than updating it in place.
        self.trips = [trip, *(t for t in self.trips if t.id != trip.id)]

    def reset_history(self) -> None:
        self.trips = []
        self.has_more = True
        self.next_cursor = None
        self.initialized = False

    def set_is_fetching(self, value: bool) -> None:
        self.is_fetching = value

    def to_view(self) -> HistoryView:
        return HistoryView(
            trips=self.trips, hasMore=self.has_more, nextCursor=self.next_cursor, isFetching=self.is_fetching
        )
