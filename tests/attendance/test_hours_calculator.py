from datetime import timedelta
from decimal import Decimal

import pytest

from src.employee_admin.employee_admin.attendance.calculator.standard_calculator import StandardHoursCalculator


def h(hours: int, minutes: int = 0) -> timedelta:
    return timedelta(hours=hours, minutes=minutes)


def test_standard_calculator_subtracts_break():
    result = StandardHoursCalculator().calculate(clock_in=h(9), clock_out=h(17, 30), break_duration=h(0, 30))

    assert result.worked == Decimal("8")
    assert result.overtime == Decimal("0")


def test_hours_beyond_threshold_are_overtime():
    result = StandardHoursCalculator().calculate(clock_in=h(8), clock_out=h(19))

    assert result.worked == Decimal("8")
    assert result.overtime == Decimal("3")


def test_exactly_threshold_has_no_overtime():
    result = StandardHoursCalculator().calculate(clock_in=h(9), clock_out=h(17))

    assert result.worked == Decimal("8")
    assert result.overtime == 0


@pytest.mark.parametrize(
    "clock_in, clock_out",
    [(None, h(17)), (h(9), None), (None, None)],
)
def test_missing_clock_time_is_a_no_op(clock_in, clock_out):
    assert StandardHoursCalculator().calculate(clock_in=clock_in, clock_out=clock_out) is None


def test_negative_span_clamps_worked_hours_to_zero():
    result = StandardHoursCalculator().calculate(clock_in=h(9), clock_out=h(10), break_duration=h(2))

    assert result.worked == 0
    assert result.overtime == 0


def test_threshold_is_configurable():
    result = StandardHoursCalculator(Decimal("7.5")).calculate(clock_in=h(9), clock_out=h(17))

    assert result.worked == Decimal("7.5")
    assert result.overtime == Decimal("0.5")


@pytest.mark.parametrize(
    "start, end, pause",
    [
        (h(6), h(18, 45), h(0, 45)),
        (h(9, 15), h(12, 40), None),
        (h(7), h(23), h(1)),
    ],
)
def test_worked_plus_overtime_equals_span_minus_break(start, end, pause):
    result = StandardHoursCalculator().calculate(clock_in=start, clock_out=end, break_duration=pause)
    raw_seconds = (end - start - (pause or timedelta(0))).total_seconds()

    assert result.worked + result.overtime == Decimal(int(raw_seconds)) / Decimal(3600)
    assert (result.overtime > 0) == (raw_seconds > 8 * 3600)
