import re
from datetime import datetime, time, timedelta, timezone
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional, Tuple

from charging_profile.core.exceptions import TimeOfDayParseError

# leaving time: zero-padded 24h "HH:MM"
LEAVING_TIME_RE = re.compile(r"(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)")
# tariff boundaries: the hour may be unpadded ("7:30" or "07:30")
TARIFF_TIME_RE = re.compile(r"(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)")

MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)
ONE_DAY = timedelta(days=1)


def _parse_time_of_day(value: Optional[str], pattern: re.Pattern, expected: str) -> time:
    if not isinstance(value, str):
        raise TimeOfDayParseError(value, expected)
    match = pattern.fullmatch(value)
    if not match:
        raise TimeOfDayParseError(value, expected)
    return time(int(match.group("hour")), int(match.group("minute")))


def parse_leaving_time_of_day(value: Optional[str]) -> time:
    return _parse_time_of_day(value, LEAVING_TIME_RE, "HH:MM")


def parse_tariff_time_of_day(value: Optional[str]) -> time:
    return _parse_time_of_day(value, TARIFF_TIME_RE, "H:MM")


def parse_starting_time(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 instant and normalize it to UTC.

    A value without an offset is taken to be UTC already.
    """
    if not isinstance(value, str) or not value.strip():
        raise TimeOfDayParseError(value, "ISO-8601 date-time")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise TimeOfDayParseError(value, "ISO-8601 date-time") from None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _on_date_of(reference: datetime, time_of_day: time) -> datetime:
    return datetime.combine(reference.date(), time_of_day, tzinfo=reference.tzinfo)


def hours_between(start: datetime, end: datetime) -> Decimal:
    delta = end - start
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return Decimal(micros) / MICROSECONDS_PER_HOUR


def add_hours(instant: datetime, hours: Decimal) -> datetime:
    micros = (hours * MICROSECONDS_PER_HOUR).to_integral_value(rounding=ROUND_HALF_EVEN)
    return instant + timedelta(microseconds=int(micros))


def resolve_leaving_time(time_of_day: str, reference: datetime) -> datetime:
    """Next occurrence of ``time_of_day`` strictly after ``reference``."""
    leaving = _on_date_of(reference, parse_leaving_time_of_day(time_of_day))
    if leaving <= reference:
        leaving += ONE_DAY
    return leaving


def resolve_tariff_window(
    start_time_of_day: str, end_time_of_day: str, reference: datetime
) -> Tuple[datetime, datetime]:
    """Resolve a daily tariff window against ``reference``.

    A window whose end is not after its start crosses midnight. A window
    that has already begun is clamped to ``reference``; one that is already
    over is moved to its next occurrence.
    """
    window_start = _on_date_of(reference, parse_tariff_time_of_day(start_time_of_day))
    window_end = _on_date_of(reference, parse_tariff_time_of_day(end_time_of_day))

    if window_end <= window_start:
        window_end += ONE_DAY
    if window_end <= reference:
        window_start += ONE_DAY
        window_end += ONE_DAY
    if window_start < reference:
        window_start = reference

    return window_start, window_end
