from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from ..core.constants import SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp ("2026-01-05T09:00:00", optional offset or "Z")."""
    v = value.strip()
    if v.endswith(("Z", "z")):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def parse_clock(value: Optional[str]) -> Optional[timedelta]:
    """Parse "HH:MM" or "HH:MM:SS" into an offset from midnight.

    Empty input means "not provided".
    """
    v = (value or "").strip()
    if not v:
        return None
    parts = v.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time string: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if not (0 <= minutes < 60 and 0 <= seconds < 60) or hours < 0:
        raise ValueError(f"Invalid time string: {value!r}")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_clock(value: Optional[timedelta]) -> Optional[str]:
    if value is None:
        return None
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    return f"{sign}{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def time_of_day(moment: datetime) -> timedelta:
    """Offset of ``moment`` from its own midnight."""
    return timedelta(
        hours=moment.hour, minutes=moment.minute, seconds=moment.second, microseconds=moment.microsecond
    )


def to_hours(span: timedelta) -> Decimal:
    seconds = Decimal(span.days * 86400 + span.seconds) + Decimal(span.microseconds) / Decimal(1_000_000)
    return seconds / SECONDS_PER_HOUR


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def today() -> date:
    return datetime.now().date()
