from datetime import date, timedelta

import pytest

from src.employee_admin.employee_admin.common.business_days import count_business_days


def test_week_spanning_weekend_counts_five():
    # 2026-01-01 is a Thursday
    assert count_business_days(date(2026, 1, 1), date(2026, 1, 7)) == 5


def test_reversed_range_is_zero():
    assert count_business_days(date(2026, 1, 7), date(2026, 1, 1)) == 0


def test_single_weekend_day_is_zero():
    assert count_business_days(date(2026, 1, 3), date(2026, 1, 3)) == 0


def test_single_weekday_is_one():
    assert count_business_days(date(2026, 1, 5), date(2026, 1, 5)) == 1


@pytest.mark.parametrize("length", [1, 2, 3, 4, 5])
def test_all_weekday_range_counts_every_day(length):
    monday = date(2026, 3, 2)
    assert count_business_days(monday, monday + timedelta(days=length - 1)) == length


@pytest.mark.parametrize("offset", range(7))
def test_any_full_week_counts_five(offset):
    start = date(2026, 2, 1) + timedelta(days=offset)
    assert count_business_days(start, start + timedelta(days=6)) == 5
