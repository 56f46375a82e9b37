"""Shared pytest fixtures for the trip-planner test suite."""
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agents.orchestrator_agent import TripPlannerAgent
from api.dependencies import get_planner
from api.main import app
from core.models import Activity, Airport, ItineraryDay, ItineraryResult
from providers.mock.airport_provider import MockAirportProvider
from providers.mock.flight_provider import MockFlightProvider
from providers.mock.trip_oracle import MockTripOracle

NOW = datetime(2025, 6, 1, 10, 0)


def amadeus_response(offers: list, carriers: dict | None = None) -> dict:
    return {"meta": {"count": len(offers)}, "data": offers, "dictionaries": {"carriers": carriers or {}}}


def amadeus_offer(itineraries: list, total: str = "512.40", currency: str = "EUR") -> dict:
    return {
        "type": "flight-offer",
        "id": "1",
        "itineraries": itineraries,
        "price": {"currency": currency, "total": total, "grandTotal": total},
    }


def amadeus_itinerary(duration: str, *segments: tuple) -> dict:
    """Each segment is (carrier, dep_iata, dep_at, arr_iata, arr_at)."""
    return {
        "duration": duration,
        "segments": [
            {
                "carrierCode": carrier,
                "departure": {"iataCode": dep_iata, "at": dep_at},
                "arrival": {"iataCode": arr_iata, "at": arr_at},
            }
            for carrier, dep_iata, dep_at, arr_iata, arr_at in segments
        ],
    }


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 12, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def oracle() -> MockTripOracle:
    return MockTripOracle()


@pytest.fixture
def airport_provider() -> MockAirportProvider:
    return MockAirportProvider()


@pytest.fixture
def flight_provider() -> MockFlightProvider:
    return MockFlightProvider()


@pytest.fixture
def planner(oracle, airport_provider, flight_provider) -> TripPlannerAgent:
    return TripPlannerAgent(oracle, airport_provider, flight_provider)


@pytest.fixture
def paris_itinerary() -> ItineraryResult:
    return ItineraryResult(
        days=[
            ItineraryDay(
                day_date="2024-12-15",
                day_number=1,
                morning=[Activity(activity="Louvre", location="Paris", duration_in_hours=3)],
            )
        ],
        arrival_city=Airport(short_name="Paris", iata="CDG"),
        return_city=Airport(short_name="Paris", iata="CDG"),
    )


# ── API test client ────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def api_client(planner):
    """AsyncClient wired to FastAPI with the planner built from mock providers."""
    app.dependency_overrides[get_planner] = lambda: planner
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    app.dependency_overrides.clear()
