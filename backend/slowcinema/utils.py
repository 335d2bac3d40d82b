from datetime import date, datetime, timezone

import pytz

from slowcinema.core.config import settings


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_site() -> datetime:
    """Current time in the site's timezone (used for the weekly rotation)."""
    return datetime.now(pytz.timezone(settings.SITE_TIMEZONE))


def isoformat_utc(value: datetime | None = None) -> str:
    value = value or now_utc()
    return as_utc(value).isoformat().replace("+00:00", "Z")


def as_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware
    ones to UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: object, *, fallback: datetime | None = None) -> datetime:
    """
    Best-effort conversion of a stored timestamp to an aware datetime.

    Accepts datetimes, ISO-8601 strings (with or without a trailing ``Z``)
    and epoch seconds. Anything missing or unparseable yields ``fallback``,
    or the current time when no fallback is given. Never raises.
    """
    fallback = fallback or now_utc()
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, int | float) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return fallback
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            return fallback
    return fallback


def week_of_year(day: date) -> int:
    """
    Week number (1-based) of ``day``, counted from day-of-year.

    Weeks start on Sunday and week 1 is the one holding 1 January, so the
    count restarts every new year and can reach 53 or 54.
    """
    start_of_year = date(day.year, 1, 1)
    # Sunday is 0
    first_weekday = start_of_year.isoweekday() % 7
    return ((day - start_of_year).days + first_weekday) // 7 + 1
