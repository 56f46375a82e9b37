"""Error taxonomy for trip planning and calendar export."""


class TripPlannerError(Exception):
    """Base class for every error raised by the planning core."""


class TripValidationError(TripPlannerError, ValueError):
    """Raised when a destination or date range is blank."""


class ResolutionError(TripPlannerError):
    """Raised when the departure airport or the trip dates/cities cannot be resolved."""


class FlightSearchError(TripPlannerError):
    """Raised inside the flight adapter; always recovered there."""


class GenerationError(TripPlannerError):
    """Raised when the itinerary oracle fails or returns an invalid day list."""


class CalendarExportError(TripPlannerError):
    """Raised when an itinerary cannot be turned into a calendar document."""
