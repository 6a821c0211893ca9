from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List

from app.ai.gazetteer import (
    DEFAULT_DESTINATION,
    DEFAULT_ESTIMATE_KEY,
    KNOWN_DESTINATION_PATTERN,
    TRAVEL_ESTIMATES,
    VIBE_RULES,
)
from app.api.models.schemas import TravelBreakdown, Trip, TripActivity, TripDay, Vibe, iso_now, new_trip_id

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 3
MAX_DAYS = 10

_DAY_COUNT_RE = re.compile(r"(\d+)\s*day")
_DESTINATION_RE = re.compile(r"\b(?:in|to)\s+([a-z\s]+?)(?:\s+under|\s+with|\s*$)")
_TRAILING_UNDER_RE = re.compile(r"\s+under.*$")
_BUDGET_RE = re.compile(r"under\s*([\d,]+)")


def extract_day_count(lower: str) -> int:
    match = _DAY_COUNT_RE.search(lower)
    if not match:
        return DEFAULT_DAYS
    count = int(match.group(1)) or DEFAULT_DAYS
    return max(1, min(count, MAX_DAYS))


def extract_destination(lower: str) -> str:
    match = _DESTINATION_RE.search(lower)
    if match:
        captured = match.group(1)
    else:
        match = KNOWN_DESTINATION_PATTERN.search(lower)
        if not match:
            return DEFAULT_DESTINATION
        captured = match.group(0)
    destination = _TRAILING_UNDER_RE.sub("", captured.strip()).strip()
    return destination.title() if destination else DEFAULT_DESTINATION


def extract_budget(lower: str) -> str:
    match = _BUDGET_RE.search(lower)
    return f"₹{match.group(1)}" if match else "Flexible Budget"


def classify_vibe(destination: str, lower: str) -> Vibe:
    # The prompt already carries the destination text; it is kept in the
    # signature so richer sources can classify on it alone.
    for pattern, vibe in VIBE_RULES:
        if pattern.search(lower):
            return vibe
    return "general"


def get_travel_breakdown(destination: str) -> TravelBreakdown:
    key = re.sub(r"\s+", "", destination.lower())[:20]
    found = next(
        (k for k in TRAVEL_ESTIMATES if k != DEFAULT_ESTIMATE_KEY and (k in key or key in k)),
        DEFAULT_ESTIMATE_KEY,
    )
    return TravelBreakdown(**TRAVEL_ESTIMATES[found])


def _religious(dest: str) -> List[TripActivity]:
    return [
        TripActivity(
            time="06:00",
            place="Morning Ganga Aarti / Temple visit",
            description="Start with sunrise aarti or temple darshan. Peaceful and photogenic.",
            cost="₹0",
            mapQuery=f"{dest} ghat temple",
            photoSpot=True,
        ),
        TripActivity(
            time="09:30",
            place="Breakfast near ghats",
            description="Simple prasad or local breakfast with chai.",
            cost="₹100–200",
            mapQuery=f"{dest} breakfast",
        ),
        TripActivity(
            time="11:00",
            place="Ashram or yoga by the river",
            description="Yoga/meditation session; many free or donation-based.",
            cost="₹0–300",
            mapQuery=f"{dest} yoga ashram",
            photoSpot=True,
        ),
        TripActivity(
            time="14:00",
            place="Local lunch + temple hopping",
            description="Visit 1–2 more temples; try local bhojanalay.",
            cost="₹150–400",
            mapQuery=f"{dest} temple",
        ),
        TripActivity(
            time="17:00",
            place="Evening ghat walk / sunset",
            description="Best time for photos and reels by the river.",
            cost="₹0",
            mapQuery=f"{dest} ghat sunset",
            photoSpot=True,
        ),
    ]


def _mountain(dest: str) -> List[TripActivity]:
    return [
        TripActivity(
            time="07:00",
            place="Early breakfast + trek start",
            description="Short trek or nature walk; carry water and layers.",
            cost="₹200–500",
            mapQuery=f"{dest} trek",
            photoSpot=True,
        ),
        TripActivity(
            time="10:00",
            place="Viewpoint / meadow",
            description="Rest at a viewpoint; great for pictures.",
            cost="₹0",
            mapQuery=f"{dest} viewpoint",
            photoSpot=True,
        ),
        TripActivity(
            time="13:00",
            place="Lunch at dhaba / cafe",
            description="Warm meal; try local chai and maggi.",
            cost="₹200–400",
            mapQuery=f"{dest} dhaba",
        ),
        TripActivity(
            time="15:00",
            place="Explore village / market",
            description="Local market or short walk in town.",
            cost="₹0–300",
            mapQuery=f"{dest} market",
        ),
        TripActivity(
            time="18:00",
            place="Sunset point",
            description="Golden hour photos; wrap up before dark.",
            cost="₹0",
            mapQuery=f"{dest} sunset point",
            photoSpot=True,
        ),
    ]


def _beach(dest: str) -> List[TripActivity]:
    return [
        TripActivity(
            time="06:30",
            place="Sunrise on the beach",
            description="Early morning beach walk; best light for photos.",
            cost="₹0",
            mapQuery=f"{dest} beach",
            photoSpot=True,
        ),
        TripActivity(
            time="09:00",
            place="Beachside breakfast / cafe",
            description="Chill breakfast with sea view.",
            cost="₹300–600",
            mapQuery=f"{dest} beach cafe",
            photoSpot=True,
        ),
        TripActivity(
            time="11:00",
            place="Beach time / water sports",
            description="Swim, surf, or just relax. Optional water sports extra.",
            cost="₹0–1k",
            mapQuery=f"{dest} beach",
        ),
        TripActivity(
            time="14:00",
            place="Lunch at shack or town",
            description="Fresh seafood or local lunch.",
            cost="₹400–800",
            mapQuery=f"{dest} lunch",
        ),
        TripActivity(
            time="17:00",
            place="French Quarter / old town (if Pondy) or sunset beach",
            description="Colonial streets or sunset by the sea, great for reels.",
            cost="₹0",
            mapQuery=f"{dest} french quarter beach",
            photoSpot=True,
        ),
    ]


def _city(dest: str) -> List[TripActivity]:
    return [
        TripActivity(
            time="08:00",
            place="Cafe / brunch spot",
            description="Start with good coffee and breakfast.",
            cost="₹400–700",
            mapQuery=f"{dest} cafe",
        ),
        TripActivity(
            time="10:30",
            place="Landmark or museum",
            description="One main attraction; book online if needed.",
            cost="₹0–500",
            mapQuery=f"{dest} landmark",
            photoSpot=True,
        ),
        TripActivity(
            time="13:00",
            place="Local lunch",
            description="Famous local food or street food.",
            cost="₹200–500",
            mapQuery=f"{dest} food",
        ),
        TripActivity(
            time="15:00",
            place="Market / shopping street",
            description="Souvenirs or just walk around.",
            cost="₹0–1k",
            mapQuery=f"{dest} market",
        ),
        TripActivity(
            time="19:00",
            place="Rooftop or waterfront",
            description="Evening views; good for photos.",
            cost="₹500–1k",
            mapQuery=f"{dest} rooftop",
            photoSpot=True,
        ),
    ]


def _general(dest: str) -> List[TripActivity]:
    return [
        TripActivity(
            time="09:00",
            place=f"Morning spot in {dest}",
            description="Breakfast and a relaxed start.",
            cost="₹300–500",
            mapQuery=f"{dest} cafe",
        ),
        TripActivity(
            time="12:00",
            place="Main attraction",
            description=f"Explore a key place in {dest}.",
            cost="₹0–400",
            mapQuery=dest,
            photoSpot=True,
        ),
        TripActivity(
            time="14:00",
            place="Lunch",
            description="Local lunch.",
            cost="₹250–500",
            mapQuery=f"{dest} restaurant",
        ),
        TripActivity(
            time="17:00",
            place="Viewpoint or walk",
            description="Evening stroll; good for photos.",
            cost="₹0",
            mapQuery=f"{dest} viewpoint",
            photoSpot=True,
        ),
    ]


# hill_station has a title but no template of its own.
ACTIVITY_TEMPLATES: Dict[Vibe, Callable[[str], List[TripActivity]]] = {
    "religious": _religious,
    "mountain": _mountain,
    "beach": _beach,
    "city": _city,
    "general": _general,
}

DAY_TITLES: Dict[Vibe, str] = {
    "religious": "Day {day}: Temples, ghats & yoga in {dest}",
    "mountain": "Day {day}: Treks & views in {dest}",
    "beach": "Day {day}: Beaches & vibes in {dest}",
    "city": "Day {day}: Exploring {dest}",
    "hill_station": "Day {day}: Hills & cool air in {dest}",
    "general": "Day {day} in {dest}",
}


def build_activities(destination: str, vibe: Vibe) -> List[TripActivity]:
    template = ACTIVITY_TEMPLATES.get(vibe, _general)
    return template(destination)


def build_trip(prompt: str) -> Trip:
    """
    Rule-based prompt parser. Every day of the trip receives the same activity
    template; only the day number and title change.
    """
    lower = prompt.lower()
    days_count = extract_day_count(lower)
    destination = extract_destination(lower)
    total_budget = extract_budget(lower)
    vibe = classify_vibe(destination, lower)
    logger.debug(
        "Parsed prompt: days=%s destination=%s budget=%s vibe=%s", days_count, destination, total_budget, vibe
    )

    days = [
        TripDay(
            day=day,
            title=DAY_TITLES[vibe].format(day=day, dest=destination),
            activities=build_activities(destination, vibe),
        )
        for day in range(1, days_count + 1)
    ]
    return Trip(
        id=new_trip_id(),
        createdAt=iso_now(),
        prompt=prompt,
        tripTitle=f"{days_count}-day trip to {destination}",
        totalBudget=total_budget,
        travelBreakdown=get_travel_breakdown(destination),
        days=days,
    )


async def generate_trip(prompt: str) -> Trip:
    return build_trip(prompt)
