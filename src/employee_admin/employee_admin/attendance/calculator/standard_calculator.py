from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from ...common.datetime_utils import to_hours
from ...core.constants import DEFAULT_NORMAL_HOURS_PER_DAY
from .base import HoursCalculator, WorkedHours

_ZERO = Decimal("0")


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) - break; hours beyond the daily threshold are overtime.

    Negative spans clamp worked hours to 0 and never produce overtime.
    """

    def __init__(self, normal_hours_per_day: Decimal = DEFAULT_NORMAL_HOURS_PER_DAY):
        self._threshold = Decimal(normal_hours_per_day)

    def calculate(
        self,
        *,
        clock_in: Optional[timedelta],
        clock_out: Optional[timedelta],
        break_duration: Optional[timedelta] = None,
    ) -> Optional[WorkedHours]:
        if clock_in is None or clock_out is None:
            return None

        span = clock_out - clock_in
        if break_duration is not None:
            span -= break_duration

        raw = to_hours(span)
        if raw <= self._threshold:
            return WorkedHours(worked=max(_ZERO, raw), overtime=_ZERO)
        return WorkedHours(worked=self._threshold, overtime=raw - self._threshold)
