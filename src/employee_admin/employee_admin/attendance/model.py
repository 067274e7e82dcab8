from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import format_clock


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, work date).

    ``worked_hours`` and ``overtime_hours`` are derived by the hours
    calculator; callers never set them directly.
    """

    attendance_id: Optional[int]
    employee_id: int
    work_date: date
    clock_in: Optional[timedelta] = None
    clock_out: Optional[timedelta] = None
    break_duration: Optional[timedelta] = None
    worked_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ClockEvent:
    """Inbound clock-in / clock-out command.

    ``break_duration`` is optional on either event; when given it replaces
    the break stored on the day's record.
    """

    employee_id: int
    timestamp: datetime
    notes: Optional[str] = None
    break_duration: Optional[timedelta] = None


@dataclass(frozen=True)
class NewAttendance:
    """Inbound direct-creation command (bypasses clock semantics)."""

    employee_id: int
    work_date: date
    clock_in: Optional[timedelta] = None
    clock_out: Optional[timedelta] = None
    break_duration: Optional[timedelta] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    """Predicate over attendance records.

    Callable for in-memory stores; the MySQL adapter reads the fields and
    builds a WHERE clause instead.
    """

    employee_id: Optional[int] = None
    work_date: Optional[date] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def __call__(self, record: AttendanceRecord) -> bool:
        if self.employee_id is not None and record.employee_id != self.employee_id:
            return False
        if self.work_date is not None and record.work_date != self.work_date:
            return False
        if self.date_from is not None and record.work_date < self.date_from:
            return False
        if self.date_to is not None and record.work_date > self.date_to:
            return False
        return True


@dataclass(frozen=True)
class AttendanceView:
    """What the service hands back to callers (never the stored entity)."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[timedelta]
    clock_out: Optional[timedelta]
    break_duration: Optional[timedelta]
    worked_hours: Decimal
    overtime_hours: Decimal
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: AttendanceRecord) -> "AttendanceView":
        if record.attendance_id is None:
            raise ValueError("Cannot build a view of an unsaved attendance record")
        return cls(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            clock_in=record.clock_in,
            clock_out=record.clock_out,
            break_duration=record.break_duration,
            worked_hours=record.worked_hours,
            overtime_hours=record.overtime_hours,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @property
    def total_hours(self) -> Decimal:
        return self.worked_hours + self.overtime_hours

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "clock_in": format_clock(self.clock_in),
            "clock_out": format_clock(self.clock_out),
            "break_duration": format_clock(self.break_duration),
            "worked_hours": float(self.worked_hours),
            "overtime_hours": float(self.overtime_hours),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
