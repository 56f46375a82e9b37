from typing import Optional

from pydantic import BaseModel, Field

from core.models import Airport, FlightBundle, ItineraryResult


# ── Itinerary ──────────────────────────────────────────────────────────────────

class ItineraryCreate(BaseModel):
    city: str = Field(min_length=1)
    dates: str = Field(min_length=1)
    preferences: Optional[str] = None
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ItineraryRead(BaseModel):
    itinerary: ItineraryResult
    city: str
    dates: str
    preferences: Optional[str] = None
    departure_airport: Airport = Field(alias="departureAirport")
    flights: Optional[FlightBundle] = None

    model_config = {"populate_by_name": True}


# ── Calendar export ────────────────────────────────────────────────────────────

class CalendarExport(BaseModel):
    itinerary: ItineraryResult
    city: str
    dates: str
    flights: Optional[FlightBundle] = None


# ── Health ─────────────────────────────────────────────────────────────────────

class HealthRead(BaseModel):
    status: str
    timestamp: str
