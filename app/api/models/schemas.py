from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


def new_trip_id() -> str:
    return str(uuid4())


def iso_now() -> str:
    """UTC timestamp like ``2025-01-31T09:15:02.123Z``; sorts lexicographically."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


Vibe = Literal["religious", "mountain", "beach", "city", "hill_station", "general"]


# ---------- Trip ----------


class TripActivity(BaseModel):
    time: str
    place: str
    description: str
    cost: str
    mapQuery: str = ""
    photoSpot: Optional[bool] = None

    @model_validator(mode="after")
    def _backfill_map_query(self) -> "TripActivity":
        if not self.mapQuery and self.place:
            self.mapQuery = self.place
        return self


class TripDay(BaseModel):
    day: int
    title: str
    activities: List[TripActivity] = Field(default_factory=list)


class TravelBreakdown(BaseModel):
    flight: str
    train: str
    bus: str
    notes: Optional[str] = None


class Trip(BaseModel):
    id: str = Field(default_factory=new_trip_id)
    createdAt: str = Field(default_factory=iso_now)
    prompt: str = ""
    tripTitle: str
    totalBudget: str = ""
    travelBreakdown: Optional[TravelBreakdown] = None
    days: List[TripDay] = Field(default_factory=list)


class PaginatedTrips(BaseModel):
    trips: List[Trip] = Field(default_factory=list)
    nextCursor: Optional[str] = None


# ---------- Request/Response models ----------


class GenerateTripRequest(BaseModel):
    prompt: str = Field(min_length=1)


class NormalizeTripRequest(BaseModel):
    prompt: str = ""
    payload: Any = None


class ActivityPatch(BaseModel):
    time: Optional[str] = None
    place: Optional[str] = None
    description: Optional[str] = None
    cost: Optional[str] = None
    mapQuery: Optional[str] = None
    photoSpot: Optional[bool] = None


class TripStateView(BaseModel):
    currentTrip: Optional[Trip] = None
    isLoading: bool = False
    error: Optional[str] = None


class HistoryView(BaseModel):
    trips: List[Trip] = Field(default_factory=list)
    hasMore: bool = True
    nextCursor: Optional[str] = None
    isFetching: bool = False


class BudgetSummary(BaseModel):
    plannedBudget: float
    estimatedSpend: float
    overBy: float
    status: str
    travelBreakdown: Optional[TravelBreakdown] = None
