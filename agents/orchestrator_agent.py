import asyncio
import logging
from datetime import date, datetime
from typing import List, Optional, Tuple

from agents.flight_agent import FlightAgent, normalize_date
from core.errors import GenerationError, ResolutionError, TripPlannerError, TripValidationError
from core.models import Airport, GeneratedItinerary, ItineraryDay, ItineraryResult, TripDates, TripPlan
from core.state import TripContext
from providers.base import BaseAirportProvider, BaseFlightProvider, BaseTripOracle

logger = logging.getLogger(__name__)


class TripPlannerAgent:
    """Resolves dates and airports, looks for flights, then asks the oracle for the days.

    Holds only injected providers, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        oracle: BaseTripOracle,
        airport_provider: BaseAirportProvider,
        flight_provider: BaseFlightProvider,
    ):
        self.oracle = oracle
        self.airport_provider = airport_provider
        self.flight_agent = FlightAgent(flight_provider)

    async def plan_trip(
        self,
        city: str,
        dates: str,
        preferences: Optional[str],
        lat: float,
        lng: float,
        now: Optional[datetime] = None,
    ) -> TripPlan:
        if not city or not city.strip():
            raise TripValidationError("City is required")
        if not dates or not dates.strip():
            raise TripValidationError("Dates are required")
        now = now or datetime.now()

        logger.info("Planning trip to %s for %r", city, dates)

        # Phase 1: normalizer and airport lookup run concurrently; both are required
        trip_dates, departure_airport = await asyncio.gather(
            self._parse_dates(city, dates, now),
            self._resolve_departure_airport(lat, lng),
        )
        logger.info(
            "Departure airport %s (%s); arriving %s on %s",
            departure_airport.short_name, departure_airport.iata,
            trip_dates.arrival_city.iata, trip_dates.arrival_date,
        )

        # Phase 2: flights depend on both results above
        flights = await self.flight_agent.search_flights(
            departure_airport.iata,
            trip_dates.arrival_city.iata,
            trip_dates.arrival_date,
            trip_dates.return_date,
        )
        logger.info("Flights %s", "found" if flights else "unavailable")

        # Phase 3: itinerary prompt uses flight-refined arrival/return context
        context = TripContext.resolve(city, trip_dates, flights)
        days = await self._generate_days(city, dates, preferences, now, context, _trip_span(trip_dates))
        logger.info("Generated %d day(s) for %s", len(days), city)

        return TripPlan(
            itinerary=ItineraryResult(
                days=days,
                arrival_city=trip_dates.arrival_city,
                return_city=trip_dates.return_city,
            ),
            departure_airport=departure_airport,
            flights=flights,
        )

    async def _parse_dates(self, city: str, dates: str, now: datetime) -> TripDates:
        try:
            return await self.oracle.parse_dates_and_cities(city, dates, now)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(f"Could not normalize trip dates: {exc}") from exc

    async def _resolve_departure_airport(self, lat: float, lng: float) -> Airport:
        try:
            return await self.airport_provider.find_nearest_airport(lat, lng)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(f"Could not find nearby airport: {exc}") from exc

    async def _generate_days(
        self,
        city: str,
        dates: str,
        preferences: Optional[str],
        now: datetime,
        context: TripContext,
        span: Optional[Tuple[date, date]] = None,
    ) -> List[ItineraryDay]:
        try:
            days = await self.oracle.generate_itinerary(
                city,
                dates,
                preferences,
                now,
                arrival_date=context.arrival_date,
                arrival_airport=context.arrival_airport,
                return_date=context.return_date,
                return_airport=context.return_airport,
            )
            # Re-check the 1..N sequence whatever oracle produced the days
            validated = GeneratedItinerary(days=days).days
        except TripPlannerError:
            raise
        except Exception as exc:
            raise GenerationError(f"Itinerary generation failed: {exc}") from exc

        if not validated:
            raise GenerationError("Itinerary generation returned no days")
        if span:
            first, last = span
            outside = [d.day_date.isoformat() for d in validated if not first <= d.day_date <= last]
            if outside:
                raise GenerationError(
                    f"Itinerary days outside {first.isoformat()}..{last.isoformat()}: {', '.join(outside)}"
                )
        return validated


def _trip_span(trip_dates: TripDates) -> Optional[Tuple[date, date]]:
    """Arrival..return as calendar dates, or None when either is not a parseable date."""
    try:
        first = date.fromisoformat(normalize_date(trip_dates.arrival_date))
        last = date.fromisoformat(normalize_date(trip_dates.return_date))
    except (ValueError, OverflowError):
        return None
    return first, last
