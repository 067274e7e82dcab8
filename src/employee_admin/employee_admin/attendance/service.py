from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import time_of_day, today, utc_now
from ..common.locks import KeyedLock
from ..common.validators import ErrorCollector, clean_notes
from ..core.constants import NOTES_SEPARATOR
from ..core.exceptions import (
    AlreadyClockedIn,
    AlreadyClockedOut,
    AttendanceNotFound,
    DuplicateRecord,
    EmployeeNotFound,
    MultipleRecordsFound,
    NoClockInFound,
    NotClockedIn,
    ValidationError,
)
from ..employees.directory import EmployeeDirectory
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import AttendanceFilter, AttendanceRecord, AttendanceView, ClockEvent, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def append_notes(existing: Optional[str], new: Optional[str]) -> Optional[str]:
    """Notes are append-only: join with "; " when both sides are non-empty."""
    new = clean_notes(new)
    if not new:
        return existing
    if not existing:
        return new
    return f"{existing}{NOTES_SEPARATOR}{new}"


def _pick_break(existing: AttendanceRecord, event: ClockEvent) -> Optional[timedelta]:
    return event.break_duration if event.break_duration is not None else existing.break_duration


class AttendanceService:
    """Use case: daily attendance (clock in, clock out, direct creation, queries).

    Per (employee, date) the record moves NoRecord -> ClockedIn -> ClockedOut.
    Every read-check-write sequence runs under a per-(employee, date) lock so
    two concurrent clock-ins cannot both create a record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        *,
        calculator: Optional[HoursCalculator] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable = utc_now,
        local_today: Callable[[], date] = today,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardHoursCalculator()
        self._locks = locks or KeyedLock()
        self._clock = clock
        self._today = local_today

    # ----- commands -----

    def clock_in(self, event: ClockEvent) -> AttendanceView:
        self._require_employee(event.employee_id)
        self._validate_event(event)
        work_date = event.timestamp.date()
        clock_time = time_of_day(event.timestamp)

        with self._locks.hold((event.employee_id, work_date)):
            existing = self._find_for_day(event.employee_id, work_date)
            now = self._clock()

            if existing is None:
                record = AttendanceRecord(
                    attendance_id=None,
                    employee_id=event.employee_id,
                    work_date=work_date,
                    clock_in=clock_time,
                    break_duration=event.break_duration,
                    notes=clean_notes(event.notes),
                    created_at=now,
                    updated_at=now,
                )
                saved = self._attendance.add(record)
                logger.info("Employee %s clocked in on %s (record %s)", event.employee_id, work_date, saved.attendance_id)
                return AttendanceView.from_record(saved)

            if existing.clock_in is not None:
                logger.info("Rejected clock-in: employee %s already clocked in on %s", event.employee_id, work_date)
                raise AlreadyClockedIn(event.employee_id, work_date)

            updated = self._with_hours(
                replace(
                    existing,
                    clock_in=clock_time,
                    break_duration=_pick_break(existing, event),
                    notes=append_notes(existing.notes, event.notes),
                    updated_at=now,
                )
            )
            self._attendance.update(updated)
            logger.info("Employee %s clocked in on %s (record %s)", event.employee_id, work_date, updated.attendance_id)
            return AttendanceView.from_record(updated)

    def clock_out(self, event: ClockEvent) -> AttendanceView:
        self._require_employee(event.employee_id)
        self._validate_event(event)
        work_date = event.timestamp.date()

        with self._locks.hold((event.employee_id, work_date)):
            existing = self._find_for_day(event.employee_id, work_date)
            if existing is None:
                raise NoClockInFound(event.employee_id, work_date)
            if existing.clock_in is None:
                raise NotClockedIn(event.employee_id, work_date)
            if existing.clock_out is not None:
                raise AlreadyClockedOut(event.employee_id, work_date)

            updated = self._with_hours(
                replace(
                    existing,
                    clock_out=time_of_day(event.timestamp),
                    break_duration=_pick_break(existing, event),
                    notes=append_notes(existing.notes, event.notes),
                    updated_at=self._clock(),
                )
            )
            self._attendance.update(updated)
            logger.info(
                "Employee %s clocked out on %s: worked=%s overtime=%s",
                event.employee_id,
                work_date,
                updated.worked_hours,
                updated.overtime_hours,
            )
            return AttendanceView.from_record(updated)

    def create_attendance(self, data: NewAttendance) -> AttendanceView:
        self._require_employee(data.employee_id)
        self._validate_new(data)

        with self._locks.hold((data.employee_id, data.work_date)):
            if self._attendance.find(AttendanceFilter(employee_id=data.employee_id, work_date=data.work_date)):
                raise DuplicateRecord(data.employee_id, data.work_date)

            now = self._clock()
            record = self._with_hours(
                AttendanceRecord(
                    attendance_id=None,
                    employee_id=data.employee_id,
                    work_date=data.work_date,
                    clock_in=data.clock_in,
                    clock_out=data.clock_out,
                    break_duration=data.break_duration,
                    notes=clean_notes(data.notes),
                    created_at=now,
                    updated_at=now,
                )
            )
            saved = self._attendance.add(record)
            logger.info("Created attendance %s for employee %s on %s", saved.attendance_id, data.employee_id, data.work_date)
            return AttendanceView.from_record(saved)

    # ----- queries -----

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceView]:
        record = self._attendance.get_by_id(int(attendance_id))
        return AttendanceView.from_record(record) if record else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[AttendanceView]:
        if start is None and end is None:
            rows: Sequence[AttendanceRecord] = self._attendance.get_by_employee(int(employee_id))
        else:
            rows = self._attendance.find(AttendanceFilter(employee_id=int(employee_id), date_from=start, date_to=end))
        return [AttendanceView.from_record(r) for r in rows]

    def list_for_date(self, work_date: date) -> list[AttendanceView]:
        return [AttendanceView.from_record(r) for r in self._attendance.find(AttendanceFilter(work_date=work_date))]

    def get_today(self, employee_id: int) -> Optional[AttendanceView]:
        self._require_employee(employee_id)
        record = self._find_for_day(int(employee_id), self._today())
        return AttendanceView.from_record(record) if record else None

    def monthly_worked_hours(self, employee_id: int, year: int, month: int) -> Decimal:
        if not 1 <= int(month) <= 12:
            raise ValidationError.for_field("month", "month must be between 1 and 12")

        rows = self._attendance.get_by_employee(int(employee_id))
        if not rows:
            raise AttendanceNotFound(f"No attendance records found for employee {employee_id}", resource_id=employee_id)

        in_month = [r for r in rows if r.work_date.year == int(year) and r.work_date.month == int(month)]
        if not in_month:
            raise AttendanceNotFound(
                f"No attendance records found for employee {employee_id} in {int(year):04d}-{int(month):02d}",
                resource_id=employee_id,
            )

        return sum((max(_ZERO, r.worked_hours or _ZERO) for r in in_month), _ZERO)

    # ----- helpers -----

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.exists(int(employee_id)):
            raise EmployeeNotFound(int(employee_id))

    def _find_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._attendance.find(AttendanceFilter(employee_id=employee_id, work_date=work_date))
        if len(rows) > 1:
            logger.error(
                "Data integrity violation: %d attendance records for employee %s on %s",
                len(rows),
                employee_id,
                work_date,
            )
            raise MultipleRecordsFound(employee_id, work_date, len(rows))
        return rows[0] if rows else None

    def _with_hours(self, record: AttendanceRecord) -> AttendanceRecord:
        hours = self._calculator.calculate(
            clock_in=record.clock_in,
            clock_out=record.clock_out,
            break_duration=record.break_duration,
        )
        if hours is None:
            return record
        return replace(record, worked_hours=hours.worked, overtime_hours=hours.overtime)

    @staticmethod
    def _validate_event(event: ClockEvent) -> None:
        if event.break_duration is not None and event.break_duration < timedelta(0):
            raise ValidationError.for_field("break_duration", "break_duration must not be negative")

    @staticmethod
    def _validate_new(data: NewAttendance) -> None:
        errors = ErrorCollector()
        if data.clock_in is not None and data.clock_out is not None:
            errors.check(data.clock_out >= data.clock_in, "clock_out", "clock_out must not be earlier than clock_in")
        if data.break_duration is not None:
            errors.check(data.break_duration >= timedelta(0), "break_duration", "break_duration must not be negative")
        errors.raise_if_any()
