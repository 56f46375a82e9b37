import logging
from datetime import datetime, timezone

import httpx
from anthropic import AsyncAnthropic
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.orchestrator_agent import TripPlannerAgent
from api.routes import calendar, itinerary
from api.schemas import HealthRead
from core.calendar_generator import CalendarGenerator
from core.config import settings
from core.logging_config import setup_logging
from providers.factory import get_provider

logger = logging.getLogger(__name__)

app = FastAPI(title="Trip Itinerary Planner", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Pure and stateless, safe to share across requests
app.state.calendar_generator = CalendarGenerator()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
    )


@app.get("/api/health", response_model=HealthRead)
async def health():
    return HealthRead(status="OK", timestamp=datetime.now(timezone.utc).isoformat())


app.include_router(itinerary.router)
app.include_router(calendar.router)


@app.on_event("startup")
async def on_startup():
    setup_logging(settings.log_level)

    app.state.http_client = httpx.AsyncClient(timeout=30.0)
    app.state.anthropic_client = AsyncAnthropic(api_key=settings.anthropic_api_key)
    clients = {
        "http_client": app.state.http_client,
        "anthropic_client": app.state.anthropic_client,
    }
    app.state.planner = TripPlannerAgent(
        oracle=get_provider("oracle", **clients),
        airport_provider=get_provider("airport", **clients),
        flight_provider=get_provider("flight", **clients),
    )
    logger.info("Trip planner ready (real APIs: %s)", settings.use_real_apis)


@app.on_event("shutdown")
async def on_shutdown():
    await app.state.http_client.aclose()
    await app.state.anthropic_client.close()
