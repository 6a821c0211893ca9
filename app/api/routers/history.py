from fastapi import APIRouter, Depends

from app.api.models.schemas import HistoryView
from app.domain.models import HistoryState
from app.domain.services.trip_service import TripService
from app.dependencies import get_history_state, get_trip_service

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryView)
async def get_history(history: HistoryState = Depends(get_history_state)):
    return history.to_view()


@router.post("/first-page", response_model=HistoryView)
async def load_first_page(svc: TripService = Depends(get_trip_service)):
    svc.load_first_page()
    return svc.history.to_view()


@router.post("/next-page", response_model=HistoryView)
async def fetch_next_page(svc: TripService = Depends(get_trip_service)):
    # Re-entrant triggers while a page is loading are ignored by the service.
    svc.fetch_next_page()
    return svc.history.to_view()


@router.post("/reset", response_model=HistoryView)
async def reset_history(history: HistoryState = Depends(get_history_state)):
    history.reset_history()
    return history.to_view()
