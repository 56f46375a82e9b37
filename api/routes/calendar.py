import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from api.dependencies import get_calendar_generator
from api.schemas import CalendarExport
from core.calendar_generator import CalendarGenerator

router = APIRouter(prefix="/api", tags=["calendar"])
logger = logging.getLogger(__name__)


@router.post("/export-calendar")
async def export_calendar(
    body: CalendarExport,
    generator: CalendarGenerator = Depends(get_calendar_generator),
):
    try:
        content, filename = generator.generate_calendar(
            body.itinerary, body.city, body.dates, body.flights
        )
    except Exception as exc:
        logger.error("ICS export failed for %s: %s", body.city, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to export calendar", "message": str(exc) or "Unknown error"},
        )

    return Response(
        content=content,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
