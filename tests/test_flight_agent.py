"""Tests for the flight search adapter."""
import logging
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from agents.flight_agent import (
    FlightAgent,
    format_display_date,
    format_display_time,
    format_duration,
    normalize_date,
    summarize_offers,
)
from conftest import amadeus_itinerary, amadeus_offer, amadeus_response


def _round_trip_response() -> dict:
    outbound = amadeus_itinerary(
        "PT9H10M",
        ("AF", "JFK", "2024-12-15T08:05:00", "CDG", "2024-12-15T15:30:00"),
        ("AF", "CDG", "2024-12-15T16:45:00", "NCE", "2024-12-15T18:15:00"),
    )
    inbound = amadeus_itinerary(
        "PT10H5M",
        ("XX", "NCE", "2024-12-20T07:00:00", "JFK", "2024-12-20T17:05:00"),
    )
    second_offer = amadeus_offer([outbound], total="99.00")
    return amadeus_response(
        [amadeus_offer([outbound, inbound]), second_offer],
        carriers={"AF": "AIR FRANCE"},
    )


def _provider(result=None, error: Exception = None) -> MagicMock:
    provider = MagicMock()
    provider.search_flight_offers = AsyncMock(return_value=result, side_effect=error)
    return provider


# ── Formatting helpers ────────────────────────────────────────────────────────

def test_format_duration_strips_period_designator():
    assert format_duration("PT9H10M") == "9h10m"
    assert format_duration("PT45M") == "45m"


def test_display_format_is_day_first_24h():
    moment = datetime(2024, 1, 2, 17, 5)
    assert format_display_date(moment) == "02/01/2024"
    assert format_display_time(moment) == "17:05"


@pytest.mark.parametrize("value", ["2024-12-15", "December 15, 2024", "2024-12-15T00:00:00"])
def test_normalize_date(value):
    assert normalize_date(value) == "2024-12-15"


# ── Offer reduction ───────────────────────────────────────────────────────────

def test_summarize_first_offer_round_trip():
    bundle = summarize_offers(_round_trip_response())

    out = bundle.outbound
    assert out.price == "512.40 EUR"
    assert out.duration == "9h10m"
    assert out.airline == "AIR FRANCE"
    assert (out.departure.date, out.departure.time, out.departure.airport) == ("15/12/2024", "08:05", "JFK")
    # arrival comes from the last segment
    assert (out.arrival.date, out.arrival.time, out.arrival.airport) == ("15/12/2024", "18:15", "NCE")

    ret = bundle.return_leg
    assert ret.duration == "10h5m"
    assert ret.departure.airport == "NCE"
    assert ret.arrival.time == "17:05"


def test_unknown_carrier_falls_back_to_code():
    bundle = summarize_offers(_round_trip_response())
    assert bundle.return_leg.airline == "XX"


def test_one_way_offer_has_no_return_leg():
    response = amadeus_response([
        amadeus_offer([amadeus_itinerary("PT1H", ("BA", "LHR", "2024-12-15T09:00:00", "CDG", "2024-12-15T11:00:00"))])
    ])
    bundle = summarize_offers(response)
    assert bundle.outbound is not None
    assert bundle.return_leg is None


def test_no_offers_returns_none():
    assert summarize_offers(amadeus_response([])) is None
    assert summarize_offers({}) is None


# ── FlightAgent.search_flights ────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_search_normalizes_dates_and_queries_one_adult():
    provider = _provider(result=_round_trip_response())

    bundle = await FlightAgent(provider).search_flights("JFK", "NCE", "December 15, 2024", "2024-12-20")

    provider.search_flight_offers.assert_awaited_once_with(
        origin="JFK",
        destination="NCE",
        departure_date="2024-12-15",
        return_date="2024-12-20",
        adults=1,
    )
    assert bundle.outbound.airline == "AIR FRANCE"


@pytest.mark.asyncio
async def test_zero_offers_returns_none_without_raising():
    provider = _provider(result=amadeus_response([]))
    assert await FlightAgent(provider).search_flights("LHR", "CDG", "2024-12-15", "2024-12-20") is None


@pytest.mark.asyncio
async def test_network_error_is_logged_and_swallowed(caplog):
    provider = _provider(error=httpx.ConnectError("connection refused"))

    with caplog.at_level(logging.WARNING, logger="agents.flight_agent"):
        result = await FlightAgent(provider).search_flights("LHR", "CDG", "2024-12-15", "2024-12-20")

    assert result is None
    assert "Could not fetch flights" in caplog.text


@pytest.mark.asyncio
async def test_malformed_payload_returns_none():
    provider = _provider(result={"data": [{"id": "1"}]})
    assert await FlightAgent(provider).search_flights("LHR", "CDG", "2024-12-15", "2024-12-20") is None


@pytest.mark.asyncio
async def test_unparseable_date_returns_none_without_querying():
    provider = _provider(result=_round_trip_response())

    result = await FlightAgent(provider).search_flights("LHR", "CDG", "your arrival date", "2024-12-20")

    assert result is None
    provider.search_flight_offers.assert_not_awaited()


@pytest.mark.asyncio
async def test_mock_provider_offer_reduces_cleanly(flight_provider):
    bundle = await FlightAgent(flight_provider).search_flights("LHR", "CDG", "2025-06-08", "2025-06-10")

    assert bundle.outbound.airline == "MOCK AIR"
    assert bundle.outbound.arrival.time == "11:15"
    assert bundle.return_leg.departure.date == "10/06/2025"
    assert bundle.outbound.price == "199.99 EUR"
