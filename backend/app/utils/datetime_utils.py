"""Datetime utility functions."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from app.config import settings

# Timezone for API responses and calendar dates (from config)
API_TIMEZONE = ZoneInfo(settings.timezone)


def to_api_timezone(dt: datetime | None) -> datetime | None:
    """Convert a datetime to API timezone, assuming UTC for naive values."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(API_TIMEZONE)


def today() -> date:
    """Current calendar date in the API timezone."""
    return datetime.now(API_TIMEZONE).date()


def age_on(birth_date: date, on: date) -> int:
    """Completed years between birth_date and `on`."""
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years
