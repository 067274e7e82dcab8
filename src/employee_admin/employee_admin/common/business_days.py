from __future__ import annotations

from datetime import date, timedelta

_WEEKEND = {5, 6}


def count_business_days(start_date: date, end_date: date) -> int:
    """Count Monday-to-Friday days in the inclusive range [start_date, end_date].

    Returns 0 when the range is reversed. No holiday calendar is applied.
    """
    if end_date < start_date:
        return 0

    business_days = 0
    current = start_date
    while current <= end_date:
        if current.weekday() not in _WEEKEND:
            business_days += 1
        current += timedelta(days=1)
    return business_days
