from __future__ import annotations

from datetime import date
from typing import Any, Optional

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass pins a ``kind`` (the discriminant the boundary layer
    dispatches on) and a default HTTP ``status_code``. Structured payload goes
    into ``details`` so callers never have to parse the message.
    """

    kind: ErrorKind = ErrorKind.VALIDATION
    status_code: int = 400

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    @property
    def code(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": {k: _jsonable(v) for k, v in self.details.items()},
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value


class EmployeeNotFound(DomainError):
    """Raised when a referenced employee id does not exist."""

    kind = ErrorKind.EMPLOYEE_NOT_FOUND
    status_code = 404

    def __init__(self, employee_id: int):
        super().__init__(f"Employee with ID {employee_id} not found", details={"employee_id": employee_id})
        self.employee_id = employee_id


class ValidationError(DomainError):
    """Raised when input data is invalid. Errors are grouped per field."""

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("One or more validation errors occurred.", details={"errors": errors})
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["validation_errors"] = self.errors
        return payload


class _AttendanceStateError(DomainError):
    def __init__(self, message: str, *, employee_id: int, work_date: date):
        super().__init__(message, details={"employee_id": employee_id, "work_date": work_date})
        self.employee_id = employee_id
        self.work_date = work_date


class AlreadyClockedIn(_AttendanceStateError):
    kind = ErrorKind.ALREADY_CLOCKED_IN
    status_code = 409

    def __init__(self, employee_id: int, work_date: date):
        super().__init__(
            f"Employee {employee_id} has already clocked in on {work_date:%Y-%m-%d}",
            employee_id=employee_id,
            work_date=work_date,
        )


class AlreadyClockedOut(_AttendanceStateError):
    kind = ErrorKind.ALREADY_CLOCKED_OUT
    status_code = 409

    def __init__(self, employee_id: int, work_date: date):
        super().__init__(
            f"Employee {employee_id} has already clocked out on {work_date:%Y-%m-%d}",
            employee_id=employee_id,
            work_date=work_date,
        )


class NotClockedIn(_AttendanceStateError):
    kind = ErrorKind.NOT_CLOCKED_IN
    status_code = 400

    def __init__(self, employee_id: int, work_date: date):
        super().__init__(
            f"Employee {employee_id} must clock in before clocking out",
            employee_id=employee_id,
            work_date=work_date,
        )


class NoClockInFound(_AttendanceStateError):
    kind = ErrorKind.NO_CLOCK_IN_FOUND
    status_code = 404

    def __init__(self, employee_id: int, work_date: date):
        super().__init__(
            f"No clock-in record found for employee {employee_id} on {work_date:%Y-%m-%d}",
            employee_id=employee_id,
            work_date=work_date,
        )


class DuplicateRecord(_AttendanceStateError):
    """A second attendance record for an (employee, date) that already has one."""

    kind = ErrorKind.DUPLICATE_RECORD
    status_code = 409

    def __init__(self, employee_id: int, work_date: date):
        super().__init__(
            f"Attendance record already exists for {work_date:%Y-%m-%d}",
            employee_id=employee_id,
            work_date=work_date,
        )


class MultipleRecordsFound(DomainError):
    """Data-integrity violation: several rows for a key that must be unique.

    Not recoverable by the caller; always logged as a system defect.
    """

    kind = ErrorKind.MULTIPLE_RECORDS_FOUND
    status_code = 500

    def __init__(self, employee_id: int, work_date: date, count: int):
        super().__init__(
            f"Found {count} attendance records for employee {employee_id} on {work_date:%Y-%m-%d}",
            details={"employee_id": employee_id, "work_date": work_date, "count": count},
        )
        self.employee_id = employee_id
        self.work_date = work_date
        self.count = count


class InsufficientLeaveDays(DomainError):
    kind = ErrorKind.INSUFFICIENT_LEAVE_DAYS
    status_code = 400

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Insufficient leave days. Requested: {required}, available: {available}",
            details={"required": required, "available": available},
        )
        self.required = required
        self.available = available


class ConflictingLeaveRequest(DomainError):
    kind = ErrorKind.CONFLICTING_LEAVE_REQUEST
    status_code = 409

    def __init__(self, start_date: date, end_date: date):
        super().__init__(
            f"Leave conflict detected for the period {start_date:%d/%m/%Y} to {end_date:%d/%m/%Y}",
            details={"start_date": start_date, "end_date": end_date},
        )
        self.start_date = start_date
        self.end_date = end_date


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, message: str, *, resource: str, resource_id: Any = None):
        super().__init__(message, details={"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class LeaveRequestNotFound(NotFound):
    def __init__(self, leave_request_id: int):
        super().__init__(
            f"Leave request with ID {leave_request_id} not found",
            resource="leave_request",
            resource_id=leave_request_id,
        )


class AttendanceNotFound(NotFound):
    def __init__(self, message: str, *, resource_id: Any = None):
        super().__init__(message, resource="attendance", resource_id=resource_id)


class InvalidStatusTransition(DomainError):
    kind = ErrorKind.INVALID_STATUS_TRANSITION
    status_code = 400

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Invalid status transition from '{current}' to '{requested}'",
            details={"current": current, "requested": requested},
        )
        self.current = current
        self.requested = requested
