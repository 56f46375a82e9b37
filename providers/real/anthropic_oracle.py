"""Claude-backed trip oracle.

Both calls ask for a single JSON object and validate it against the pydantic
schemas in core.models.
"""
import json
import logging
from datetime import datetime
from typing import List, Optional

from anthropic import AsyncAnthropic
from pydantic import ValidationError

from core.config import settings
from core.errors import GenerationError, ResolutionError
from core.models import GeneratedItinerary, ItineraryDay, TripDates
from providers.base import BaseTripOracle

logger = logging.getLogger(__name__)

DATES_SCHEMA = (
    '{"arrivalCity": {"shortName": "<city>", "iata": "<IATA>"}, '
    '"arrivalDate": "<YYYY-MM-DD>", '
    '"returnCity": {"shortName": "<city>", "iata": "<IATA>"}, '
    '"returnDate": "<YYYY-MM-DD>"}'
)

ITINERARY_SCHEMA = (
    '{"days": [{"dayDate": "<YYYY-MM-DD>", "dayNumber": 1, '
    '"morning": [{"activity": "...", "location": "...", "durationInHours": 2}], '
    '"afternoon": [...], "evening": [...]}]}'
)


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        text = "\n".join(lines[1:-1]) if len(lines) > 2 else text
    return text


class ClaudeTripOracle(BaseTripOracle):
    def __init__(self, client: AsyncAnthropic, model: Optional[str] = None):
        self._client = client
        self._model = model or settings.anthropic_model

    async def _complete_json(self, prompt: str) -> dict:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=settings.oracle_max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        text = ""
        for block in response.content:
            if hasattr(block, "text"):
                text = block.text
                break
        return json.loads(_strip_fences(text))

    async def parse_dates_and_cities(self, city: str, dates: str, now: datetime) -> TripDates:
        prompt = (
            "You are a travel agent helping users plan their trips.\n"
            f"For context, today is {now.date().isoformat()}.\n"
            f"First, define the trip dates for a trip to {city} for the following "
            f"user-provided dates: {dates}.\n"
            "Return the arrival date and return date in ISO format.\n"
            "Also, return information about the departure city (short name and IATA code) "
            "and the arrival city (short name and IATA code).\n"
            "Ensure the arrival date is not in the past.\n\n"
            f"Return a JSON object with this exact schema:\n{DATES_SCHEMA}\n"
            "Return ONLY the JSON object, no markdown fences."
        )
        try:
            payload = await self._complete_json(prompt)
            return TripDates.model_validate(payload)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ResolutionError(f"Could not normalize dates for {city!r}: {exc}") from exc

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
        prompt = (
            "You are a travel agent helping users plan their trips.\n"
            f"Create a travel itinerary for {city} for {dates}.\n"
            f"For context, today is {now.date().isoformat()}.\n"
            + (f"Preferences: {preferences}\n" if preferences else "")
            + "Please provide a detailed day-by-day plan with activities and locations.\n"
            f"We have defined that the user will be arriving on {arrival_date} to "
            f"{arrival_airport} and returning on {return_date} to {return_airport}.\n"
            "Take into account whether the arrival or departure times are in the morning, "
            "afternoon, or evening when planning activities for those days.\n"
            "For each day, provide a dayDate field with the actual date in ISO format and a "
            "dayNumber field with the sequential day number (1, 2, 3, etc.).\n"
            "Every activity lasts at least 1 hour.\n\n"
            f"Return a JSON object with this exact schema:\n{ITINERARY_SCHEMA}\n"
            "Return ONLY the JSON object, no markdown fences."
        )
        try:
            payload = await self._complete_json(prompt)
            return GeneratedItinerary.model_validate(payload).days
        except (json.JSONDecodeError, ValidationError) as exc:
            raise GenerationError(f"Itinerary for {city!r} is invalid: {exc}") from exc
