from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.employee_admin.employee_admin.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.employee_admin.employee_admin.attendance.service import AttendanceService
from src.employee_admin.employee_admin.employees.memory_directory import InMemoryEmployeeDirectory
from src.employee_admin.employee_admin.leaves.balance import LeaveBalanceLedger
from src.employee_admin.employee_admin.leaves.memory_leave_repository import InMemoryLeaveRequestRepository
from src.employee_admin.employee_admin.leaves.service import LeaveRequestService

EMPLOYEE_ID = 7
OTHER_EMPLOYEE_ID = 8
UNKNOWN_EMPLOYEE_ID = 999


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 12, 15)


@pytest.fixture
def employees() -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory([EMPLOYEE_ID, OTHER_EMPLOYEE_ID])


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def attendance_service(attendance_repo, employees, fixed_now) -> AttendanceService:
    return AttendanceService(
        attendance_repo,
        employees,
        clock=lambda: fixed_now,
        local_today=lambda: date(2026, 1, 5),
    )


@pytest.fixture
def leave_repo() -> InMemoryLeaveRequestRepository:
    return InMemoryLeaveRequestRepository()


@pytest.fixture
def leave_service(leave_repo, employees, fixed_now, fixed_today) -> LeaveRequestService:
    return LeaveRequestService(
        leave_repo,
        employees,
        ledger=LeaveBalanceLedger(leave_repo, entitlement=25),
        clock=lambda: fixed_now,
        local_today=lambda: fixed_today,
    )
