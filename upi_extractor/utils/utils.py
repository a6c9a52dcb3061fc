import secrets
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

API_KEY_PREFIX = "key_"


def generate_api_key() -> str:
    """Return a fresh opaque API key, e.g. ``key_3f9c...`` (32 hex chars)."""
    return API_KEY_PREFIX + secrets.token_hex(16)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_isoformat(value: Optional[datetime]) -> Optional[str]:
    """Render a stored UTC datetime with an explicit ``+00:00`` offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def date_range_bounds(
    start_date: Optional[date],
    end_date: Optional[date],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Turn inclusive calendar dates into datetime bounds.

    The start bound is midnight of ``start_date``; the end bound is midnight
    of the day after ``end_date`` so the whole end day is included.
    """
    start = datetime.combine(start_date, time.min) if start_date else None
    end = datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None
    return start, end
