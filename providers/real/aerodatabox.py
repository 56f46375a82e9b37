"""AeroDataBox Airport Provider: nearest-airport search through API Market.

Credentials come from settings (API_MARKET_KEY).
"""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from core.config import settings
from core.errors import ResolutionError
from core.models import Airport
from providers.base import BaseAirportProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://prod.api.market/api/v1/aedbx/aerodatabox"


class AeroDataBoxAirportProvider(BaseAirportProvider):
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str] = None,
        radius_km: Optional[int] = None,
    ):
        self._client = client
        self._api_key = api_key if api_key is not None else settings.api_market_key
        self._radius_km = radius_km or settings.airport_search_radius_km

    async def find_nearest_airport(self, lat: float, lng: float) -> Airport:
        try:
            resp = await self._client.get(
                f"{BASE_URL}/airports/search/location",
                params={
                    "lat": lat,
                    "lon": lng,
                    "radiusKm": self._radius_km,
                    "limit": 1,
                    "withFlightInfoOnly": "false",
                },
                headers={"x-api-market-key": self._api_key},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("AeroDataBox airport search failed for (%s, %s): %s", lat, lng, exc)
            raise ResolutionError(f"Airport lookup failed: {exc}") from exc

        items = (data.get("items") or []) if isinstance(data, dict) else []
        airport = items[0] if items else None
        if not airport or not airport.get("shortName") or not airport.get("iata"):
            raise ResolutionError(
                "Could not find nearby airport: Invalid API response with missing fields"
            )

        try:
            return Airport(short_name=airport["shortName"], iata=airport["iata"])
        except ValidationError as exc:
            raise ResolutionError(f"Airport lookup returned an invalid airport: {exc}") from exc
