from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from app.ai.itinerary_engine import generate_trip
from app.ai.normalizer import normalize_ai_trip_response
from app.api.models.schemas import ActivityPatch, Trip, TripDay
from app.domain.models import HistoryState, TripState
from app.domain.repositories import TripRepository

logger = logging.getLogger(__name__)

TripGenerator = Callable[[str], Awaitable[Trip]]

GENERATE_FAILED_MESSAGE = "Something went wrong while generating your trip. Please try again."
REGENERATE_FAILED_MESSAGE = "Could not regenerate this day. Please try again."


class TripService:
    def __init__(
        self,
        repo: TripRepository,
        trip_state: TripState,
        history: HistoryState,
        generator: TripGenerator = generate_trip,
        page_size: int = 10,
    ):
        self.repo = repo
        self.trip_state = trip_state
        self.history = history
        self.generator = generator
        self.page_size = page_size

    # ---------- current trip ----------

    async def create_trip(self, prompt: str) -> Optional[Trip]:
        self.trip_state.set_error(None)
        self.trip_state.set_loading(True)
        try:
            trip = await self.generator(prompt)
        except Exception as exc:
            logger.exception("Trip generation failed: %s", exc)
            self.trip_state.set_error(GENERATE_FAILED_MESSAGE)
            return None
        finally:
            self.trip_state.set_loading(False)

        self.trip_state.set_trip(trip)
        self.history.add_trip_to_top(trip)
        logger.info("Created trip %s (%s)", trip.id, trip.tripTitle)
        return trip

    def import_trip(self, raw: object, prompt: str) -> Trip:
        """Accept a structured payload from an outside generator."""
        trip = normalize_ai_trip_response(raw, prompt)
        self.trip_state.set_trip(trip)
        self.history.add_trip_to_top(trip)
        return trip

    async def regenerate_day(self, day_number: int) -> Optional[Trip]:
        current = self.trip_state.current_trip
        if current is None or not any(day.day == day_number for day in current.days):
            return None

        self.trip_state.set_error(None)
        self.trip_state.set_loading(True)
        try:
            regenerated = await self.generator(current.prompt)
        except Exception as exc:
            logger.exception("Regenerating day %s of trip %s failed: %s", day_number, current.id, exc)
            self.trip_state.set_error(REGENERATE_FAILED_MESSAGE)
            return None
        finally:
            self.trip_state.set_loading(False)

        new_day = next((day for day in regenerated.days if day.day == day_number), None)
        if new_day is None and 0 < day_number <= len(regenerated.days):
            new_day = regenerated.days[day_number - 1]
        if new_day is None:
            return current
        return self.replace_day(day_number, new_day)

    def update_activity(self, day_number: int, activity_index: int, patch: ActivityPatch) -> Optional[Trip]:
        updated = self.trip_state.update_activity(day_number, activity_index, patch)
        if updated is not None:
            self.history.add_trip_to_top(updated)
        return updated

    def replace_day(self, day_number: int, new_day: TripDay) -> Optional[Trip]:
        updated = self.trip_state.replace_day(day_number, new_day)
        if updated is not None:
            self.history.add_trip_to_top(updated)
        return updated

    def open_trip(self, trip_id: str) -> Trip:
        trip = self.repo.get(trip_id)
        self.trip_state.set_trip(trip)
        return trip

    def bootstrap(self) -> Optional[Trip]:
        """Restore the most recent trip when nothing is checked out yet."""
        if self.trip_state.current_trip is not None:
            return self.trip_state.current_trip
        latest = self.repo.latest()
        if latest is not None:
            self.trip_state.set_trip(latest)
        return latest

    # ---------- history ----------

    def load_first_page(self) -> None:
        if self.history.initialized:
            return
        page = self.repo.paginate(None, self.page_size)
        self.history.set_initial_page(page.trips, page.nextCursor)

    def fetch_next_page(self) -> bool:
        """Load the next page unless a fetch is in flight or the list is exhausted."""
        if self.history.is_fetching:
            return False
        if self.history.initialized and not self.history.has_more:
            return False

        self.history.set_is_fetching(True)
        try:
            if not self.history.initialized:
                self.load_first_page()
            else:
                page = self.repo.paginate(self.history.next_cursor, self.page_size)
                self.history.append_page(page.trips, page.nextCursor)
        finally:
            self.history.set_is_fetching(False)
        return True
