"""Provider factory: returns Mock or Real providers based on USE_REAL_APIS."""
from typing import Optional

import httpx
from anthropic import AsyncAnthropic

from core.config import settings
from providers.base import BaseAirportProvider, BaseFlightProvider, BaseTripOracle


def get_provider(
    domain: str,
    http_client: Optional[httpx.AsyncClient] = None,
    anthropic_client: Optional[AsyncAnthropic] = None,
    use_real: Optional[bool] = None,
) -> BaseAirportProvider | BaseFlightProvider | BaseTripOracle:
    """Return the active provider for the given domain.

    Real providers reuse the long-lived clients passed in; mock providers need none.
    """
    if use_real is None:
        use_real = settings.use_real_apis

    if domain == "airport":
        if use_real:
            from providers.real.aerodatabox import AeroDataBoxAirportProvider
            return AeroDataBoxAirportProvider(_require(http_client, domain))
        from providers.mock.airport_provider import MockAirportProvider
        return MockAirportProvider()

    elif domain == "flight":
        if use_real:
            from providers.real.amadeus import AmadeusFlightProvider
            return AmadeusFlightProvider(_require(http_client, domain))
        from providers.mock.flight_provider import MockFlightProvider
        return MockFlightProvider()

    elif domain == "oracle":
        if use_real:
            from providers.real.anthropic_oracle import ClaudeTripOracle
            return ClaudeTripOracle(_require(anthropic_client, domain))
        from providers.mock.trip_oracle import MockTripOracle
        return MockTripOracle()

    else:
        raise ValueError(f"Unknown domain: {domain}")


def _require(client, domain: str):
    if client is None:
        raise ValueError(f"Real '{domain}' provider needs a client")
    return client
