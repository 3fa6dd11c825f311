"""Date keys and day-of-journey arithmetic.

Day keys follow the device's local wall clock (naive ``datetime.now()``).
Streak continuity depends on every caller deriving keys the same way, so
nothing here converts to UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta

SECONDS_PER_DAY = 24 * 60 * 60


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def today_key(now: datetime | None = None) -> str:
    """Local calendar date as YYYY-MM-DD, evaluated at call time."""
    return _now(now).date().isoformat()


def yesterday_key(now: datetime | None = None) -> str:
    """The calendar day before today_key(now)."""
    return (_now(now).date() - timedelta(days=1)).isoformat()


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into a naive local datetime.

    Aware values (e.g. a trailing 'Z') are converted to local time and made
    naive. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def day_of_journey(start: str | datetime | None, now: datetime | None = None) -> int:
    """Ordinal day of the journey; day 1 is the start day itself.

    Uses the absolute difference, so a start slightly in the future (clock
    skew) still gives a positive day. Never returns less than 1.
    """
    start_dt = parse_timestamp(start)
    if start_dt is None:
        return 1
    diff = abs((_now(now) - start_dt).total_seconds())
    return int(diff // SECONDS_PER_DAY) + 1
