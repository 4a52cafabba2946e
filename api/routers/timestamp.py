"""Timestamp router for the Timestamp Microservice API.

Errors are returned as ``{"error": ...}`` bodies with a 200 status, so
clients tell failures apart by the presence of the ``error`` field.
"""
from typing import Optional, Union

from fastapi import APIRouter, Query

from api.models.timestamp import DateQuery, DateResponse, DiffResponse, ErrorResponse
from api.services import dates
from api.services.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


# Registered ahead of /{date} so "diff" is never read as a date
@router.get("/diff/{date1}/{date2}", response_model=Union[DiffResponse, ErrorResponse])
async def get_date_difference(date1: str, date2: str) -> Union[DiffResponse, ErrorResponse]:
    """Absolute difference between two dates.

    Args:
        date1: First date, as free-form date text
        date2: Second date, as free-form date text

    Returns:
        Days, hours (0-23), minutes (0-59) and seconds (0-59) between the
        two dates, or an error if either cannot be parsed
    """
    try:
        return dates.date_difference(date1, date2)
    except dates.DateError as e:
        logger.debug("Rejected diff input", extra={"date1": date1, "date2": date2, "reason": e.message})
        return ErrorResponse(error=dates.INVALID_DATE)


@router.get("", response_model=DateResponse, include_in_schema=False)
@router.get("/", response_model=DateResponse)
async def get_current_date() -> DateResponse:
    """Current instant as Unix milliseconds and a UTC string."""
    return dates.current_date_response()


@router.get("/{date}", response_model=Union[DateResponse, ErrorResponse])
async def get_date(
    date: str,
    timezone: Optional[str] = Query(
        default=None,
        description="IANA timezone identifier to shift the result into",
    ),
) -> Union[DateResponse, ErrorResponse]:
    """Resolve a timestamp or date string.

    Digit strings are epoch milliseconds; anything else is parsed as date
    text. When ``timezone`` is set, the result carries that zone's
    wall-clock time.
    """
    try:
        return dates.resolve_query(DateQuery(raw_value=date, timezone=timezone))
    except dates.DateError as e:
        logger.debug("Rejected date input", extra={"date": date, "timezone": timezone, "reason": e.message})
        return ErrorResponse(error=e.message)
