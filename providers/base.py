"""Base provider ABCs for the external collaborators of the trip planner."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.models import Airport, ItineraryDay, TripDates


class BaseAirportProvider(ABC):
    """Resolves the airport closest to a pair of coordinates."""

    @abstractmethod
    async def find_nearest_airport(self, lat: float, lng: float) -> Airport:
        """Return the nearest airport or raise ResolutionError."""


class BaseFlightProvider(ABC):
    """Flight-offer source returning the raw offers payload.

    The payload follows the Amadeus Flight Offers Search shape:
    ``{"data": [offer, ...], "dictionaries": {"carriers": {...}}}``.
    """

    @abstractmethod
    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: int = 1,
    ) -> dict:
        pass


class BaseTripOracle(ABC):
    """Structured-output service for date normalization and itinerary generation."""

    @abstractmethod
    async def parse_dates_and_cities(self, city: str, dates: str, now: datetime) -> TripDates:
        pass

    @abstractmethod
    async def generate_itinerary(
        self,
        city: str,
        dates: str,
        preferences: Optional[str],
        now: datetime,
        arrival_date: str,
        arrival_airport: str,
        return_date: str,
        return_airport: str,
    ) -> List[ItineraryDay]:
        pass
