from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import ValidationError

from app.api.models.schemas import PaginatedTrips, Trip
from app.external.local_storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "travelplanner_trips"


class TripRepository(ABC):
    @abstractmethod
    def read_all(self) -> List[Trip]:
        raise NotImplementedError

    @abstractmethod
    def persist(self, trip: Trip) -> Trip:
        raise NotImplementedError

    @abstractmethod
    def paginate(self, cursor: Optional[str], limit: int) -> PaginatedTrips:
        raise NotImplementedError

    def latest(self) -> Optional[Trip]:
        trips = self.read_all()
        return trips[0] if trips else None

    def get(self, trip_id: str) -> Trip:
        for trip in self.read_all():
            if trip.id == trip_id:
                return trip
        raise KeyError("Trip not found")


def _looks_like_trip(item: Any) -> bool:
    return (
        isinstance(item, Mapping)
        and isinstance(item.get("id"), str)
        and isinstance(item.get("createdAt"), str)
        and isinstance(item.get("tripTitle"), str)
        and isinstance(item.get("totalBudget"), str)
        and isinstance(item.get("days"), list)
    )


class LocalTripRepository(TripRepository):
    """
    Trips stored as one JSON array under a single storage key, newest first.
    With no storage available every read is empty and every write is dropped.
    """

    def __init__(self, storage: Optional[KeyValueStorage], storage_key: str = STORAGE_KEY):
        self.storage = storage
        self.storage_key = storage_key

    def read_all(self) -> List[Trip]:
        if self.storage is None:
            return []
        raw = self.storage.get(self.storage_key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored trips under %r are not valid JSON; treating as empty", self.storage_key)
            return []
        if not isinstance(parsed, list):
            return []

        trips: List[Trip] = []
        for item in parsed:
            if not _looks_like_trip(item):
                continue
            try:
                trips.append(Trip.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed stored trip %s: %s", item.get("id"), exc.error_count())
        # createdAt is ISO-8601; string order is time order. sorted() keeps ties stable.
        return sorted(trips, key=lambda trip: trip.createdAt, reverse=True)

    def persist(self, trip: Trip) -> Trip:
        if self.storage is None:
            return trip
        existing = [t for t in self.read_all() if t.id != trip.id]
        payload = [t.model_dump(mode="json", exclude_none=True) for t in [trip, *existing]]
        self.storage.set(self.storage_key, json.dumps(payload, ensure_ascii=False))
        return trip

    def paginate(self, cursor: Optional[str], limit: int) -> PaginatedTrips:
        all_trips = self.read_all()
        if not all_trips:
            return PaginatedTrips(trips=[], nextCursor=None)

        start = 0
        if cursor:
            anchor = next((idx for idx, t in enumerate(all_trips) if t.createdAt == cursor), None)
            if anchor is not None:
                start = anchor + 1
            else:
                older = next((idx for idx, t in enumerate(all_trips) if t.createdAt < cursor), None)
                if older is None:
                    return PaginatedTrips(trips=[], nextCursor=None)
                start = older

        page = all_trips[start : start + max(limit, 0)]
        if not page:
            return PaginatedTrips(trips=[], nextCursor=None)

        has_more = start + len(page) < len(all_trips)
        return PaginatedTrips(trips=page, nextCursor=page[-1].createdAt if has_more else None)
