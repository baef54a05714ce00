from __future__ import annotations

import os
from datetime import date, datetime, timedelta, timezone


def now_utc() -> datetime:
    """Return the current time in UTC.

    Tests can override via `INSUREBDD_TEST_NOW_ISO` to make time-based logic deterministic.
    """
    override = os.environ.get("INSUREBDD_TEST_NOW_ISO")
    if override:
        return parse_utc_iso(override)
    return datetime.now(timezone.utc)


def parse_utc_iso(s: str) -> datetime:
    """Parse an ISO-8601 timestamp into a UTC datetime.

    Accepts either an explicit offset (e.g. `...+00:00`) or `Z`.
    """
    if s.endswith("Z"):
        s = f"{s[:-1]}+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        raise ValueError("Timestamp must be timezone-aware (include +00:00 or Z)")
    return dt.astimezone(timezone.utc)


def today() -> date:
    return now_utc().date()


def file_timestamp(now: datetime | None = None) -> str:
    """ISO timestamp safe for use in file names (`:` and `.` replaced)."""
    now = now or now_utc()
    return now.isoformat().replace(":", "-").replace(".", "-")


def current_date() -> str:
    return today().isoformat()


def future_date(days: int) -> str:
    return (today() + timedelta(days=days)).isoformat()


def past_date(days: int) -> str:
    return (today() - timedelta(days=days)).isoformat()


def _as_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_date(value: str | date, fmt: str = "YYYY-MM-DD") -> str:
    d = _as_date(value)
    return fmt.replace("YYYY", f"{d.year:04d}").replace("MM", f"{d.month:02d}").replace("DD", f"{d.day:02d}")


def is_date_in_future(value: str | date) -> bool:
    return _as_date(value) > today()


def is_date_in_past(value: str | date) -> bool:
    return _as_date(value) < today()
