from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.models.schemas import GenerateTripRequest, NormalizeTripRequest, PaginatedTrips, Trip
from app.core.errors import GenerationError, NotFoundError
from app.domain.repositories import TripRepository
from app.domain.services.trip_service import GENERATE_FAILED_MESSAGE, TripService
from app.dependencies import get_trip_repo, get_trip_service

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def create_trip(body: GenerateTripRequest, svc: TripService = Depends(get_trip_service)):
    trip = await svc.create_trip(body.prompt)
    if trip is None:
        raise GenerationError(svc.trip_state.error or GENERATE_FAILED_MESSAGE)
    return trip


@router.post("/normalize", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def import_trip(body: NormalizeTripRequest, svc: TripService = Depends(get_trip_service)):
    return svc.import_trip(body.payload, body.prompt)


@router.get("", response_model=PaginatedTrips)
async def list_trips(
    cursor: Optional[str] = None,
    limit: int = Query(default=10, ge=1, le=100),
    repo: TripRepository = Depends(get_trip_repo),
):
    return repo.paginate(cursor, limit)


@router.get("/latest", response_model=Trip)
async def latest_trip(repo: TripRepository = Depends(get_trip_repo)):
    trip = repo.latest()
    if trip is None:
        raise NotFoundError("No trips saved yet")
    return trip


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(trip_id: str, repo: TripRepository = Depends(get_trip_repo)):
    try:
        return repo.get(trip_id)
    except KeyError:
        raise NotFoundError("Trip not found")
