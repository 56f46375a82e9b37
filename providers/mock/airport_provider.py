from typing import Optional

from core.models import Airport
from providers.base import BaseAirportProvider


class MockAirportProvider(BaseAirportProvider):
    """Always resolves to the same airport regardless of coordinates."""

    def __init__(self, airport: Optional[Airport] = None):
        self._airport = airport or Airport(short_name="London Heathrow", iata="LHR")

    async def find_nearest_airport(self, lat: float, lng: float) -> Airport:
        return self._airport
