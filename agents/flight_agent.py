"""Flight search adapter: reduces a flight-offers payload to a compact FlightBundle."""
import logging
from datetime import datetime
from typing import Optional

from dateutil import parser as dateparser

from core.errors import FlightSearchError
from core.models import FlightBundle, FlightEndpoint, FlightLeg
from providers.base import BaseFlightProvider

logger = logging.getLogger(__name__)

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
DISPLAY_TIME_FORMAT = "%H:%M"


def normalize_date(value: str) -> str:
    """Parse any date-like string and return it as YYYY-MM-DD."""
    return dateparser.parse(value).date().isoformat()


def format_duration(iso_duration: str) -> str:
    """PT9H10M -> 9h10m."""
    return iso_duration.replace("PT", "").lower()


def format_display_date(moment: datetime) -> str:
    return moment.strftime(DISPLAY_DATE_FORMAT)


def format_display_time(moment: datetime) -> str:
    return moment.strftime(DISPLAY_TIME_FORMAT)


def _endpoint(point: dict) -> FlightEndpoint:
    moment = datetime.fromisoformat(point["at"])
    return FlightEndpoint(
        date=format_display_date(moment),
        time=format_display_time(moment),
        airport=point["iataCode"],
    )


def _leg(itinerary: dict, price: dict, carriers: dict) -> FlightLeg:
    segments = itinerary["segments"]
    first, last = segments[0], segments[-1]
    carrier_code = first["carrierCode"]
    return FlightLeg(
        price=f"{price['total']} {price['currency']}",
        duration=format_duration(itinerary["duration"]),
        airline=carriers.get(carrier_code) or carrier_code,
        departure=_endpoint(first["departure"]),
        arrival=_endpoint(last["arrival"]),
    )


def summarize_offers(response: dict) -> Optional[FlightBundle]:
    """Take the first offer as-is; itinerary 0 is outbound, itinerary 1 the return."""
    offers = response.get("data") or []
    if not offers:
        return None

    offer = offers[0]
    itineraries = offer["itineraries"]
    carriers = (response.get("dictionaries") or {}).get("carriers") or {}
    price = offer["price"]

    outbound = _leg(itineraries[0], price, carriers) if itineraries else None
    return_leg = _leg(itineraries[1], price, carriers) if len(itineraries) > 1 else None
    return FlightBundle(outbound=outbound, return_leg=return_leg)


class FlightAgent:
    """Best-effort round-trip search. Never raises: failures yield None."""

    def __init__(self, provider: BaseFlightProvider):
        self.provider = provider

    async def search_flights(
        self,
        origin_iata: str,
        destination_iata: str,
        departure_date: str,
        return_date: str,
    ) -> Optional[FlightBundle]:
        try:
            return await self._search(origin_iata, destination_iata, departure_date, return_date)
        except FlightSearchError as exc:
            logger.warning("Could not fetch flights %s → %s: %s", origin_iata, destination_iata, exc)
            return None

    async def _search(
        self,
        origin_iata: str,
        destination_iata: str,
        departure_date: str,
        return_date: str,
    ) -> Optional[FlightBundle]:
        try:
            response = await self.provider.search_flight_offers(
                origin=origin_iata,
                destination=destination_iata,
                departure_date=normalize_date(departure_date),
                return_date=normalize_date(return_date),
                adults=1,
            )
            bundle = summarize_offers(response)
        except Exception as exc:
            raise FlightSearchError(str(exc) or exc.__class__.__name__) from exc

        if bundle is None:
            logger.info("No flight offers for %s → %s", origin_iata, destination_iata)
        return bundle
