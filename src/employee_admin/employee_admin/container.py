from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.calculator.standard_calculator import StandardHoursCalculator
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.locks import KeyedLock
from .core.rules import BusinessRules
from .database.connection import DatabaseConnection, DBConfig
from .employees.directory import EmployeeDirectory
from .employees.memory_directory import InMemoryEmployeeDirectory
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .leaves.balance import LeaveBalanceLedger
from .leaves.memory_leave_repository import InMemoryLeaveRequestRepository
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .leaves.repository import LeaveRequestRepository
from .leaves.service import LeaveRequestService


@dataclass(frozen=True)
class Container:
    rules: BusinessRules

    employees: EmployeeDirectory
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRequestRepository

    attendance_service: AttendanceService
    leave_ledger: LeaveBalanceLedger
    leave_service: LeaveRequestService


def _wire(
    *,
    rules: BusinessRules,
    employees: EmployeeDirectory,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRequestRepository,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        employees,
        calculator=StandardHoursCalculator(rules.normal_hours_per_day),
        locks=KeyedLock(),
    )
    leave_ledger = LeaveBalanceLedger(leave_repo, entitlement=rules.annual_leave_entitlement)
    leave_service = LeaveRequestService(
        leave_repo,
        employees,
        ledger=leave_ledger,
        enforce_status_transitions=rules.enforce_status_transitions,
        locks=KeyedLock(),
    )

    return Container(
        rules=rules,
        employees=employees,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        attendance_service=attendance_service,
        leave_ledger=leave_ledger,
        leave_service=leave_service,
    )


def build_container(*, db_config: dict, rules: Optional[BusinessRules] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _wire(
        rules=rules or BusinessRules(),
        employees=MySQLEmployeeDirectory(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRequestRepository(conn),
    )


def build_memory_container(*, employee_ids: Iterable[int] = (), rules: Optional[BusinessRules] = None) -> Container:
    """Wiring without a database (tests, demos, STORAGE=memory)."""
    return _wire(
        rules=rules or BusinessRules(),
        employees=InMemoryEmployeeDirectory(employee_ids),
        attendance_repo=InMemoryAttendanceRepository(),
        leave_repo=InMemoryLeaveRequestRepository(),
    )
