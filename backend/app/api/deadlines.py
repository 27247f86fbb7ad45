"""
Deadline API routes.
Next due dates, urgency status and upcoming filings for a client's services.
"""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, HTTPException

from app.config import get_settings
from app.schemas.schemas import DeadlineStatusRequest, UpcomingDeadlinesRequest
from app.core.deadlines import DeadlineEngine, FilingType, Period, format_deadline_date

router = APIRouter()
settings = get_settings()
engine = DeadlineEngine()


@router.get("/next/{filing_type}")
async def next_due_date(
    filing_type: FilingType,
    month: int | None = None,
    year: int | None = None,
    as_of: date | None = None,
):
    """Next due date for a filing type, optionally for a given period."""
    period = None
    if month is not None or year is not None:
        if month is None or year is None:
            raise HTTPException(status_code=400, detail="Both month and year are required for a period")
        if not 1 <= month <= 12:
            raise HTTPException(status_code=400, detail="month must be between 1 and 12")
        period = Period(month=month, year=year)

    due_date = engine.get_next_due_date(filing_type, period=period, today=as_of)
    deadline = engine.deadlines[filing_type]
    return {
        "deadline": asdict(deadline),
        "due_date": due_date,
        "display_date": format_deadline_date(due_date),
        "status": asdict(engine.get_due_date_status(due_date, as_of)),
    }


@router.post("/status")
async def due_date_status(data: DeadlineStatusRequest):
    return asdict(engine.get_due_date_status(data.due_date, data.as_of))


@router.post("/upcoming")
async def upcoming_deadlines(data: UpcomingDeadlinesRequest):
    """Deadlines for the given services falling within the look-ahead window."""
    days_ahead = data.days_ahead
    if days_ahead is None:
        days_ahead = settings.DEFAULT_DEADLINE_WINDOW_DAYS

    upcoming = engine.get_upcoming_deadlines(data.services, days_ahead=days_ahead, today=data.as_of)
    return {
        "deadlines": [asdict(u) for u in upcoming],
        "total": len(upcoming),
    }


@router.get("/holidays/{year}")
async def public_holidays(year: int):
    holidays = engine.calendar.for_year(year)
    return {
        "year": year,
        "holidays": [asdict(h) for h in holidays],
        "total": len(holidays),
    }
