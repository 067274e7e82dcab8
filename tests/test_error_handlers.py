from __future__ import annotations

from datetime import date

import pytest

from src.employee_admin.employee_admin.common.error_handlers import STATUS_BY_KIND
from src.employee_admin.employee_admin.core import exceptions as exc
from src.employee_admin.employee_admin.core.enums import ErrorKind


def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


@pytest.mark.parametrize(
    "error",
    [
        exc.EmployeeNotFound(1),
        exc.ValidationError.for_field("month", "bad"),
        exc.AlreadyClockedIn(1, date(2026, 1, 5)),
        exc.AlreadyClockedOut(1, date(2026, 1, 5)),
        exc.NotClockedIn(1, date(2026, 1, 5)),
        exc.NoClockInFound(1, date(2026, 1, 5)),
        exc.DuplicateRecord(1, date(2026, 1, 5)),
        exc.MultipleRecordsFound(1, date(2026, 1, 5), 2),
        exc.InsufficientLeaveDays(6, 5),
        exc.ConflictingLeaveRequest(date(2026, 1, 10), date(2026, 1, 12)),
        exc.LeaveRequestNotFound(3),
        exc.InvalidStatusTransition("Approved", "Pending"),
    ],
)
def test_exception_status_matches_table(error):
    assert STATUS_BY_KIND[error.kind] == error.status_code
    assert error.to_dict()["code"] == error.kind.value


def test_error_details_are_json_ready():
    payload = exc.ConflictingLeaveRequest(date(2026, 1, 10), date(2026, 1, 12)).to_dict()

    assert payload["details"] == {"start_date": "2026-01-10", "end_date": "2026-01-12"}
    assert "10/01/2026" in payload["message"]
