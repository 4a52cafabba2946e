"""Date resolution service for the Timestamp Microservice API.

Turns raw path segments into instants and instants into the
``{unix, utc}`` and ``{days, hours, minutes, seconds}`` payloads the
routers return.

Numeric input is always epoch milliseconds. Anything else goes through
``dateutil``'s free-form parser, with naive results taken as UTC.
"""

import re
import warnings
from datetime import datetime, timedelta, timezone, tzinfo
from email.utils import format_datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser
from dateutil.parser import UnknownTimezoneWarning

from api.models.timestamp import DateQuery, DateResponse, DiffResponse
from api.services.utils import ensure_utc, utc_now

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Largest magnitude an ECMAScript-style time value may take
MAX_TIME_VALUE_MS = 8_640_000_000_000_000

INTEGER_LITERAL = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)

# Number-like text that is not an integer: decimals, exponents, repeated
# signs, non-ASCII digits
NUMERIC_TEXT = re.compile(r"\s*[+-]*(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")

# RFC 2822 zone names, in seconds east of UTC
ZONE_ABBREVIATIONS = {
    "UT": 0,
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
}

UTC_ALIASES = {"UTC", "GMT"}

INVALID_DATE = "Invalid Date"
INVALID_TIMEZONE = "Invalid Timezone"


class DateError(ValueError):
    """Base class for input that cannot be resolved to an instant."""

    message = INVALID_DATE

    def __init__(self, value: Optional[str] = None):
        super().__init__(f"{self.message}: {value!r}" if value is not None else self.message)
        self.value = value


class InvalidDateError(DateError):
    """Input does not describe a valid calendar instant."""

    message = INVALID_DATE


class InvalidTimezoneError(DateError):
    """Timezone identifier is not in the timezone database."""

    message = INVALID_TIMEZONE


def instant_from_millis(ms: int) -> datetime:
    """Build a UTC-aware datetime from epoch milliseconds.

    Raises:
        InvalidDateError: If the value is outside the representable range
    """
    if abs(ms) > MAX_TIME_VALUE_MS:
        raise InvalidDateError(str(ms))
    try:
        return EPOCH + timedelta(milliseconds=ms)
    except OverflowError as e:
        raise InvalidDateError(str(ms)) from e


def parse_date_string(raw: str) -> datetime:
    """Parse free-form date text into a UTC-aware datetime.

    Missing fields default to January 1st of the current year at midnight,
    and naive results are assumed to be UTC. Zone names other than the
    RFC 2822 ones are rejected rather than ignored, as is number-like text
    that is not an integer.

    Raises:
        InvalidDateError: If the text is not a recognizable date
    """
    if raw is None or not raw.strip():
        raise InvalidDateError(raw)
    if NUMERIC_TEXT.fullmatch(raw) and not INTEGER_LITERAL.fullmatch(raw):
        raise InvalidDateError(raw)

    default = datetime(utc_now().year, 1, 1)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", UnknownTimezoneWarning)
            parsed = date_parser.parse(raw, default=default, tzinfos=ZONE_ABBREVIATIONS)
    except (ValueError, OverflowError, UnknownTimezoneWarning) as e:
        # ParserError is a ValueError
        raise InvalidDateError(raw) from e

    try:
        return ensure_utc(parsed).astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(raw) from e


def parse_date_value(raw: str) -> datetime:
    """Parse a path segment as epoch milliseconds, falling back to date text.

    A string of digits is always a timestamp, never a bare year.
    """
    if INTEGER_LITERAL.fullmatch(raw):
        return instant_from_millis(int(raw))
    return parse_date_string(raw)


def load_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone identifier.

    Raises:
        InvalidTimezoneError: If the name is unknown or malformed
    """
    if name.upper() in UTC_ALIASES:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneError(name) from e


def shift_to_timezone(instant: datetime, tz: tzinfo) -> datetime:
    """Reinterpret the wall-clock time of ``instant`` in ``tz`` as UTC.

    The result equals ``instant`` plus the zone's UTC offset at that
    instant, so DST transitions are honored exactly. Before a zone's first
    transition the offset is its local mean time, which is negative for
    zones west of Greenwich (Pacific/Kiritimati included); shifting a
    year-1 instant there leaves the datetime range and is Invalid Date.
    """
    try:
        return instant.astimezone(tz).replace(tzinfo=timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(instant.isoformat()) from e


def to_unix_millis(dt: datetime) -> int:
    """Whole milliseconds since the epoch, floored."""
    return (ensure_utc(dt) - EPOCH) // timedelta(milliseconds=1)


def to_utc_string(dt: datetime) -> str:
    """RFC 1123 rendering, e.g. ``Fri, 25 Dec 2015 00:00:00 GMT``."""
    return format_datetime(ensure_utc(dt).astimezone(timezone.utc), usegmt=True)


def to_date_response(dt: datetime) -> DateResponse:
    return DateResponse(unix=to_unix_millis(dt), utc=to_utc_string(dt))


def current_date_response(now: Optional[datetime] = None) -> DateResponse:
    """Describe the current instant (or ``now``, when given)."""
    return to_date_response(now if now is not None else utc_now())


def resolve_date(raw: str, timezone_name: Optional[str] = None) -> DateResponse:
    """Resolve a raw path segment, optionally shifted into a timezone.

    An unknown timezone is reported even when the date is also invalid.

    Args:
        raw: Epoch milliseconds or free-form date text
        timezone_name: Optional IANA timezone identifier; empty means none

    Returns:
        DateResponse with ``unix`` and ``utc``

    Raises:
        InvalidTimezoneError: If ``timezone_name`` is not recognized
        InvalidDateError: If ``raw`` is not a valid instant
    """
    try:
        instant = parse_date_value(raw)
        date_error = None
    except InvalidDateError as e:
        instant = None
        date_error = e

    if timezone_name:
        tz = load_timezone(timezone_name)
        if date_error is None:
            instant = shift_to_timezone(instant, tz)

    if date_error is not None:
        raise date_error

    return to_date_response(instant)


def resolve_query(query: DateQuery) -> DateResponse:
    return resolve_date(query.raw_value, query.timezone)


def date_difference(raw1: str, raw2: str) -> DiffResponse:
    """Absolute difference between two date strings.

    Both values go through the free-form parser only; digit strings are
    not treated as timestamps here.

    Raises:
        InvalidDateError: If either value is not a valid date
    """
    first = parse_date_string(raw1)
    second = parse_date_string(raw2)

    diff_ms = abs(to_unix_millis(second) - to_unix_millis(first))
    total_seconds = diff_ms // 1000
    total_minutes = total_seconds // 60
    total_hours = total_minutes // 60

    return DiffResponse(
        days=total_hours // 24,
        hours=total_hours % 24,
        minutes=total_minutes % 60,
        seconds=total_seconds % 60,
    )
