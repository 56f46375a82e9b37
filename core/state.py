"""Fallback-resolved trip context passed to the itinerary oracle."""
import dataclasses
from dataclasses import dataclass
from typing import Optional

from core.models import FlightBundle, TripDates

ARRIVAL_DATE_PLACEHOLDER = "your arrival date"
RETURN_AIRPORT_PLACEHOLDER = "your departure location"
RETURN_DATE_PLACEHOLDER = "your departure date"


def first_present(*candidates: Optional[str]) -> Optional[str]:
    """Return the first candidate that is neither None nor blank."""
    for candidate in candidates:
        if candidate is not None and str(candidate).strip():
            return candidate
    return None


@dataclass
class TripContext:
    arrival_airport: str
    arrival_date: str       # arrival time when a flight was found, else a date
    return_airport: str
    return_date: str        # departure time when a flight was found, else a date

    @classmethod
    def resolve(
        cls,
        destination: str,
        trip_dates: Optional[TripDates],
        flights: Optional[FlightBundle],
    ) -> "TripContext":
        """Flight data first, then normalizer output, then a placeholder."""
        outbound = flights.outbound if flights else None
        return_leg = flights.return_leg if flights else None

        return cls(
            arrival_airport=first_present(
                outbound.arrival.airport if outbound else None,
                trip_dates.arrival_city.short_name if trip_dates else None,
                destination,
            ),
            arrival_date=first_present(
                outbound.arrival.time if outbound else None,
                trip_dates.arrival_date if trip_dates else None,
                ARRIVAL_DATE_PLACEHOLDER,
            ),
            return_airport=first_present(
                return_leg.departure.airport if return_leg else None,
                trip_dates.return_city.short_name if trip_dates else None,
                RETURN_AIRPORT_PLACEHOLDER,
            ),
            return_date=first_present(
                return_leg.departure.time if return_leg else None,
                trip_dates.return_date if trip_dates else None,
                RETURN_DATE_PLACEHOLDER,
            ),
        )

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)
