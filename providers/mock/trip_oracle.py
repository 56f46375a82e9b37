"""Deterministic trip oracle used when USE_REAL_APIS is off and in tests."""
from datetime import date, datetime, timedelta
from typing import List, Optional

from core.models import Activity, Airport, ItineraryDay, TripDates
from providers.base import BaseTripOracle

DEFAULT_TRIP_DAYS = 3


class MockTripOracle(BaseTripOracle):
    """Plans a trip starting one week after ``now`` with one activity per slot."""

    def __init__(
        self,
        arrival_city: Optional[Airport] = None,
        trip_days: int = DEFAULT_TRIP_DAYS,
    ):
        self._arrival_city = arrival_city or Airport(short_name="Paris", iata="CDG")
        self._trip_days = trip_days

    def _trip_start(self, now: datetime) -> date:
        return now.date() + timedelta(days=7)

    async def parse_dates_and_cities(self, city: str, dates: str, now: datetime) -> TripDates:
        start = self._trip_start(now)
        end = start + timedelta(days=self._trip_days - 1)
        return TripDates(
            arrival_city=self._arrival_city,
            arrival_date=start.isoformat(),
            return_city=self._arrival_city,
            return_date=end.isoformat(),
        )

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
        start = self._trip_start(now)
        days = []
        for offset in range(self._trip_days):
            days.append(
                ItineraryDay(
                    day_date=start + timedelta(days=offset),
                    day_number=offset + 1,
                    morning=[Activity(activity=f"Walking tour of {city}", location=city, duration_in_hours=3)],
                    afternoon=[Activity(activity="Museum visit", location=city, duration_in_hours=2)],
                    evening=[Activity(activity="Dinner", location=city, duration_in_hours=2)],
                )
            )
        return days
