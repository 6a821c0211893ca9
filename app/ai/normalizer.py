"""Coerce untrusted generator output (e.g. parsed model JSON) into a valid Trip."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any, List, Optional

from app.api.models.schemas import TravelBreakdown, Trip, TripActivity, TripDay, iso_now, new_trip_id

logger = logging.getLogger(__name__)

UNTITLED_TRIP = "Untitled Trip"


def safe_parse_json(text: str) -> Any | None:
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None


def _str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _day_number(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        return int(number) if math.isfinite(number) and number.is_integer() else 0
    return 0


def _coerce_activities(raw: Any) -> List[TripActivity]:
    if not isinstance(raw, list):
        return []
    activities: List[TripActivity] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        place = _str(item.get("place"))
        photo_spot = item.get("photoSpot")
        activities.append(
            TripActivity(
                time=_str(item.get("time")),
                place=place,
                description=_str(item.get("description")),
                cost=_str(item.get("cost")),
                mapQuery=_str(item.get("mapQuery")) or place,
                photoSpot=photo_spot if isinstance(photo_spot, bool) else None,
            )
        )
    return activities


def _coerce_days(raw: Any) -> List[TripDay]:
    if not isinstance(raw, list):
        return []
    days: List[TripDay] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        number = _day_number(item.get("day"))
        fallback_title = f"Day {number or ''}".strip()
        days.append(
            TripDay(
                day=number,
                title=_str(item.get("title"), fallback_title),
                activities=_coerce_activities(item.get("activities")),
            )
        )
    return days


def _coerce_travel_breakdown(raw: Any) -> Optional[TravelBreakdown]:
    if not isinstance(raw, Mapping):
        return None
    notes = raw.get("notes")
    return TravelBreakdown(
        flight=_str(raw.get("flight")),
        train=_str(raw.get("train")),
        bus=_str(raw.get("bus")),
        notes=notes if isinstance(notes, str) else None,
    )


def normalize_ai_trip_response(raw: Any, prompt: str) -> Trip:
    if not isinstance(raw, Mapping):
        logger.warning("Generator response is not an object (%s); returning an empty trip", type(raw).__name__)
        return Trip(
            id=new_trip_id(),
            createdAt=iso_now(),
            prompt=prompt,
            tripTitle=UNTITLED_TRIP,
            totalBudget="",
            days=[],
        )

    return Trip(
        id=new_trip_id(),
        createdAt=iso_now(),
        prompt=prompt,
        tripTitle=_str(raw.get("tripTitle")) or UNTITLED_TRIP,
        totalBudget=_str(raw.get("totalBudget")),
        travelBreakdown=_coerce_travel_breakdown(raw.get("travelBreakdown")),
        days=_coerce_days(raw.get("days")),
    )
