from fastapi import APIRouter, Depends

from app.api.models.schemas import ActivityPatch, BudgetSummary, Trip, TripDay, TripStateView
from app.core.errors import GenerationError, NotFoundError, ValidationError
from app.domain.budget import summarize_budget
from app.domain.models import TripState
from app.domain.services.trip_service import TripService
from app.dependencies import get_trip_service, get_trip_state

router = APIRouter(prefix="/planner", tags=["planner"])

NO_TRIP_MESSAGE = "No trip is loaded"


@router.get("", response_model=TripStateView)
async def get_planner_state(trip_state: TripState = Depends(get_trip_state)):
    return trip_state.to_view()


@router.post("/bootstrap", response_model=TripStateView)
async def bootstrap(svc: TripService = Depends(get_trip_service)):
    svc.bootstrap()
    return svc.trip_state.to_view()


@router.post("/open/{trip_id}", response_model=Trip)
async def open_trip(trip_id: str, svc: TripService = Depends(get_trip_service)):
    try:
        return svc.open_trip(trip_id)
    except KeyError:
        raise NotFoundError("Trip not found")


@router.patch("/days/{day}/activities/{index}", response_model=Trip)
async def update_activity(day: int, index: int, body: ActivityPatch, svc: TripService = Depends(get_trip_service)):
    if index < 0:
        raise ValidationError("activity index must not be negative", {"field": "index", "reason": "must be >= 0"})
    trip = svc.update_activity(day, index, body)
    if trip is None:
        raise NotFoundError(NO_TRIP_MESSAGE)
    return trip


@router.put("/days/{day}", response_model=Trip)
async def replace_day(day: int, body: TripDay, svc: TripService = Depends(get_trip_service)):
    trip = svc.replace_day(day, body)
    if trip is None:
        raise NotFoundError(NO_TRIP_MESSAGE)
    return trip


@router.post("/days/{day}/regenerate", response_model=Trip)
async def regenerate_day(day: int, svc: TripService = Depends(get_trip_service)):
    trip = await svc.regenerate_day(day)
    if trip is not None:
        return trip
    if svc.trip_state.error:
        raise GenerationError(svc.trip_state.error)
    raise NotFoundError(NO_TRIP_MESSAGE if svc.trip_state.current_trip is None else f"Day {day} not found")


@router.get("/budget", response_model=BudgetSummary)
async def budget(trip_state: TripState = Depends(get_trip_state)):
    if trip_state.current_trip is None:
        raise NotFoundError(NO_TRIP_MESSAGE)
    return summarize_budget(trip_state.current_trip)
