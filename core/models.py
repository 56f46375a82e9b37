"""Domain models shared by the planner, the providers and the HTTP layer.

JSON uses camelCase field names; Python code uses the snake_case attributes.
"""
import re
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_IATA_RE = re.compile(r"^[A-Z]{3}$")

_MODEL_CONFIG = {"populate_by_name": True}


class Airport(BaseModel):
    short_name: str = Field(alias="shortName", min_length=1)
    iata: str = Field(min_length=1)

    model_config = _MODEL_CONFIG

    @field_validator("iata", mode="before")
    @classmethod
    def normalize_iata(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v and not _IATA_RE.match(v):
                raise ValueError(f"'{v}' is not a 3-letter IATA code")
        return v


class TripDates(BaseModel):
    """Normalized arrival/return cities and dates for one trip request."""

    arrival_city: Airport = Field(alias="arrivalCity")
    arrival_date: str = Field(alias="arrivalDate", min_length=1)
    return_city: Airport = Field(alias="returnCity")
    return_date: str = Field(alias="returnDate", min_length=1)

    model_config = _MODEL_CONFIG


class Activity(BaseModel):
    activity: str = Field(min_length=1)
    location: str = Field(min_length=1)
    duration_in_hours: float = Field(alias="durationInHours", ge=1)

    model_config = _MODEL_CONFIG


class ItineraryDay(BaseModel):
    day_date: date = Field(alias="dayDate")
    day_number: int = Field(alias="dayNumber", gt=0)
    morning: Optional[List[Activity]] = None
    afternoon: Optional[List[Activity]] = None
    evening: Optional[List[Activity]] = None

    model_config = _MODEL_CONFIG


class FlightEndpoint(BaseModel):
    date: str   # DD/MM/YYYY
    time: str   # HH:MM, 24-hour clock
    airport: str


class FlightLeg(BaseModel):
    price: str
    duration: str
    airline: str
    departure: FlightEndpoint
    arrival: FlightEndpoint


class FlightBundle(BaseModel):
    outbound: Optional[FlightLeg] = None
    return_leg: Optional[FlightLeg] = Field(default=None, alias="return")

    model_config = _MODEL_CONFIG


class ItineraryResult(BaseModel):
    days: List[ItineraryDay]
    arrival_city: Airport = Field(alias="arrivalCity")
    return_city: Airport = Field(alias="returnCity")

    model_config = _MODEL_CONFIG


class TripPlan(BaseModel):
    itinerary: ItineraryResult
    departure_airport: Airport = Field(alias="departureAirport")
    flights: Optional[FlightBundle] = None

    model_config = _MODEL_CONFIG


class GeneratedItinerary(BaseModel):
    """Structured output of the itinerary oracle."""

    days: List[ItineraryDay]

    @model_validator(mode="after")
    def check_day_sequence(self) -> "GeneratedItinerary":
        for position, day in enumerate(self.days, start=1):
            if day.day_number != position:
                raise ValueError(
                    f"dayNumber {day.day_number} at position {position} breaks the 1..N sequence"
                )
        return self
