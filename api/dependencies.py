"""Request-scoped access to the long-lived objects built at startup."""
from fastapi import Request

from agents.orchestrator_agent import TripPlannerAgent
from core.calendar_generator import CalendarGenerator


def get_planner(request: Request) -> TripPlannerAgent:
    return request.app.state.planner


def get_calendar_generator(request: Request) -> CalendarGenerator:
    return request.app.state.calendar_generator
