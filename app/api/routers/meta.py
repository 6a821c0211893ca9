from fastapi import APIRouter

from app.ai.gazetteer import DEFAULT_ESTIMATE_KEY, KNOWN_DESTINATIONS, TRAVEL_ESTIMATES
from app.ai.itinerary_engine import DAY_TITLES, get_travel_breakdown

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/vibes")
async def list_vibes():
    return [{"id": vibe, "dayTitle": title.format(day=1, dest="...")} for vibe, title in DAY_TITLES.items()]


@router.get("/destinations")
async def list_destinations():
    names = list(dict.fromkeys([*KNOWN_DESTINATIONS, *(k for k in TRAVEL_ESTIMATES if k != DEFAULT_ESTIMATE_KEY)]))
    return [
        {"id": name, "name": name.title(), "travel": get_travel_breakdown(name).model_dump(exclude_none=True)}
        for name in names
    ]
