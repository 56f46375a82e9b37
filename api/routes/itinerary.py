import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from agents.orchestrator_agent import TripPlannerAgent
from api.dependencies import get_planner
from api.schemas import ItineraryCreate, ItineraryRead
from core.errors import TripValidationError

router = APIRouter(prefix="/api", tags=["itinerary"])
logger = logging.getLogger(__name__)


@router.post("/itinerary", response_model=ItineraryRead)
async def create_itinerary(
    body: ItineraryCreate,
    planner: TripPlannerAgent = Depends(get_planner),
):
    try:
        plan = await planner.plan_trip(
            city=body.city,
            dates=body.dates,
            preferences=body.preferences,
            lat=body.lat,
            lng=body.lng,
        )
    except TripValidationError as exc:
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": [{"msg": str(exc)}]},
        )
    except Exception as exc:
        logger.error("Itinerary generation failed for %s: %s", body.city, exc)
        return JSONResponse(status_code=500, content={"error": "Failed to generate itinerary"})

    return ItineraryRead(
        itinerary=plan.itinerary,
        city=body.city,
        dates=body.dates,
        preferences=body.preferences,
        departure_airport=plan.departure_airport,
        flights=plan.flights,
    )
