"""Amadeus Flight Provider: Flight Offers Search API v2.

Credentials come from settings (AMADEUS_CLIENT_ID / AMADEUS_CLIENT_SECRET).
Single attempt per call: HTTP errors propagate to the flight adapter.
"""
import logging
import time
from typing import Optional

import httpx

from core.config import settings
from providers.base import BaseFlightProvider

logger = logging.getLogger(__name__)


class AmadeusFlightProvider(BaseFlightProvider):
    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        hostname: Optional[str] = None,
    ):
        self._client = client
        self._client_id = client_id if client_id is not None else settings.amadeus_client_id
        self._client_secret = (
            client_secret if client_secret is not None else settings.amadeus_client_secret
        )
        self._hostname = hostname or settings.amadeus_hostname
        self._base_url = f"https://{self._hostname}"
        self._token: Optional[str] = None
        self._token_expires_at: float = 0

    async def _ensure_token(self) -> str:
        """OAuth2 client_credentials token refresh."""
        if self._token and time.time() < self._token_expires_at:
            return self._token

        resp = await self._client.post(
            f"{self._base_url}/v1/security/oauth2/token",
            data={
                "grant_type": "client_credentials",
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        resp.raise_for_status()
        data = resp.json()
        self._token = data["access_token"]
        self._token_expires_at = time.time() + data.get("expires_in", 1799) - 60
        return self._token

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        token = await self._ensure_token()
        headers = {"Authorization": f"Bearer {token}"}
        resp = await self._client.request(
            method, f"{self._base_url}{path}", headers=headers, **kwargs
        )
        resp.raise_for_status()
        return resp.json()

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: int = 1,
    ) -> dict:
        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults,
        }
        if return_date:
            params["returnDate"] = return_date

        logger.debug("Amadeus flight-offers search %s → %s on %s", origin, destination, departure_date)
        return await self._request("GET", "/v2/shopping/flight-offers", params=params)
