from typing import Optional

from providers.base import BaseFlightProvider


def _segment(carrier: str, number: str, dep_iata: str, dep_at: str, arr_iata: str, arr_at: str) -> dict:
    return {
        "departure": {"iataCode": dep_iata, "at": dep_at},
        "arrival": {"iataCode": arr_iata, "at": arr_at},
        "carrierCode": carrier,
        "number": number,
        "duration": "PT2H",
        "numberOfStops": 0,
    }


class MockFlightProvider(BaseFlightProvider):
    """Returns a single round-trip offer in the Amadeus flight-offers shape."""

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: int = 1,
    ) -> dict:
        itineraries = [
            {
                "duration": "PT2H15M",
                "segments": [
                    _segment("MA", "101", origin, f"{departure_date}T09:00:00",
                             destination, f"{departure_date}T11:15:00"),
                ],
            }
        ]
        if return_date:
            itineraries.append(
                {
                    "duration": "PT2H30M",
                    "segments": [
                        _segment("MA", "102", destination, f"{return_date}T17:45:00",
                                 origin, f"{return_date}T20:15:00"),
                    ],
                }
            )

        return {
            "meta": {"count": 1},
            "data": [
                {
                    "type": "flight-offer",
                    "id": "1",
                    "oneWay": return_date is None,
                    "itineraries": itineraries,
                    "price": {
                        "currency": "EUR",
                        "total": f"{199.99 * adults:.2f}",
                        "grandTotal": f"{199.99 * adults:.2f}",
                    },
                    "validatingAirlineCodes": ["MA"],
                }
            ],
            "dictionaries": {"carriers": {"MA": "MOCK AIR"}},
        }
