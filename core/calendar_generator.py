"""iCalendar (RFC 5545) export of an itinerary and its flights.

Activities are laid out back-to-back inside their slot, starting at the slot's
base hour in local trip-day time. Flight times come back from the DD/MM/YYYY
and HH:MM display strings produced by the flight adapter. Every timestamp is
written in UTC.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from icalendar import Calendar, Event

from core.errors import CalendarExportError
from core.models import Activity, FlightBundle, FlightLeg, ItineraryResult

PRODUCT_ID = "-//Travel Itinerary//EN"
UID_DOMAIN = "travel-itinerary"
FILENAME_SUFFIX = "_itinerary.ics"

# (slot attribute, base hour, summary icon)
SLOTS = (
    ("morning", 9, "🌅"),
    ("afternoon", 13, "☀️"),
    ("evening", 18, "🌙"),
)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


@dataclass
class CalendarEvent:
    uid: str
    summary: str
    description: str
    location: str
    dtstart: datetime
    dtend: datetime


def ics_text(text: str) -> str:
    """Collapse CRLF and bare CR to LF; icalendar escapes only LF-terminated lines."""
    return _LINE_BREAK.sub("\n", text)


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are local wall-clock time; the result is always UTC."""
    return moment.astimezone(timezone.utc)


def parse_display_datetime(date_text: str, time_text: str) -> datetime:
    """Inverse of the flight adapter's DD/MM/YYYY + HH:MM rendering."""
    try:
        day, month, year = (int(part) for part in date_text.strip().split("/"))
        hours, minutes = (int(part) for part in time_text.strip().split(":")[:2])
        return datetime(year, month, day, hours, minutes)
    except ValueError as exc:
        raise CalendarExportError(
            f"Cannot parse flight time '{date_text} {time_text}': {exc}"
        ) from exc


def generate_calendar_filename(city: str) -> str:
    return f"{_FILENAME_UNSAFE.sub('_', city)}{FILENAME_SUFFIX}"


def schedule_slot(day: date, base_hour: int, activities: List[Activity]) -> List[Tuple[datetime, datetime]]:
    """Start/end pairs for activities run back-to-back from ``base_hour``.

    Nothing is clamped: a slot that runs past midnight spills into the next day.
    """
    midnight = datetime(day.year, day.month, day.day)
    elapsed = 0.0
    times = []
    for activity in activities:
        start = midnight + timedelta(hours=base_hour + elapsed)
        end = start + timedelta(hours=activity.duration_in_hours)
        times.append((start, end))
        elapsed += activity.duration_in_hours
    return times


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


class CalendarGenerator:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def generate_calendar(
        self,
        itinerary: ItineraryResult,
        city: str,
        dates: str,
        flights: Optional[FlightBundle] = None,
    ) -> Tuple[str, str]:
        """Return (ICS document, suggested filename)."""
        content = self.generate_ics_content(itinerary, city, dates, flights)
        return content, generate_calendar_filename(city)

    def generate_ics_content(
        self,
        itinerary: ItineraryResult,
        city: str,
        dates: str,
        flights: Optional[FlightBundle] = None,
    ) -> str:
        now = self._clock()
        events = self.build_events(itinerary, city, flights, now=now)

        cal = Calendar()
        cal.add("prodid", PRODUCT_ID)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("x-wr-calname", ics_text(f"Trip to {city} ({dates})"))

        for event in events:
            ev = Event()
            ev.add("uid", event.uid)
            ev.add("dtstart", as_utc(event.dtstart))
            ev.add("dtend", as_utc(event.dtend))
            ev.add("summary", ics_text(event.summary))
            ev.add("description", ics_text(event.description))
            ev.add("location", ics_text(event.location))
            ev.add("dtstamp", as_utc(now))
            cal.add_component(ev)

        # to_ical() escapes text values and folds lines at 75 octets
        return cal.to_ical().decode("utf-8")

    def build_events(
        self,
        itinerary: ItineraryResult,
        city: str,
        flights: Optional[FlightBundle] = None,
        now: Optional[datetime] = None,
    ) -> List[CalendarEvent]:
        """Outbound flight, return flight, then each day's morning/afternoon/evening."""
        token = int((now or self._clock()).timestamp() * 1000)
        events: List[CalendarEvent] = []

        if flights and flights.outbound:
            events.append(self._flight_event(
                flights.outbound,
                uid=f"outbound-flight-{token}@{UID_DOMAIN}",
                title="Outbound Flight",
                description=f"Flight to {city}",
            ))
        if flights and flights.return_leg:
            events.append(self._flight_event(
                flights.return_leg,
                uid=f"return-flight-{token}@{UID_DOMAIN}",
                title="Return Flight",
                description=f"Return flight from {city}",
            ))

        for day_index, day in enumerate(itinerary.days):
            for slot, base_hour, icon in SLOTS:
                activities = getattr(day, slot) or []
                times = schedule_slot(day.day_date, base_hour, activities)
                for index, (activity, (start, end)) in enumerate(zip(activities, times)):
                    events.append(CalendarEvent(
                        uid=f"{slot}-{day_index}-{index}-{token}@{UID_DOMAIN}",
                        summary=f"{icon} {activity.activity}",
                        description=(
                            f"{slot.capitalize()} activity in {activity.location}\n"
                            f"Duration: {_format_hours(activity.duration_in_hours)} hours"
                        ),
                        location=activity.location,
                        dtstart=start,
                        dtend=end,
                    ))
        return events

    @staticmethod
    def _flight_event(leg: FlightLeg, uid: str, title: str, description: str) -> CalendarEvent:
        return CalendarEvent(
            uid=uid,
            summary=f"✈️ {title} - {leg.airline}",
            description=(
                f"{description}\n"
                f"Airline: {leg.airline}\n"
                f"Duration: {leg.duration}\n"
                f"Price: {leg.price}"
            ),
            location=f"{leg.departure.airport} → {leg.arrival.airport}",
            dtstart=parse_display_datetime(leg.departure.date, leg.departure.time),
            dtend=parse_display_datetime(leg.arrival.date, leg.arrival.time),
        )
