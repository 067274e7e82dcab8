from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Leave request workflow status."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    def can_transition_to(self, target: "LeaveStatus") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]

    @classmethod
    def parse(cls, value: str) -> "LeaveStatus":
        """Accept the wire value in any case ("approved", "APPROVED", ...)."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown leave status: {value!r}")


_ALLOWED_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED}),
    LeaveStatus.APPROVED: frozenset(),
    LeaveStatus.REJECTED: frozenset(),
    LeaveStatus.CANCELLED: frozenset(),
}


class LeaveType(str, Enum):
    ANNUAL = "Annual"
    SICK = "Sick"
    UNPAID = "Unpaid"
    MATERNITY = "Maternity"
    PATERNITY = "Paternity"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> "LeaveType":
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown leave type: {value!r}")


class ErrorKind(str, Enum):
    """Discriminant carried by every domain error.

    The HTTP layer maps each kind to a status code; keep that table in sync
    when adding a member.
    """

    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    VALIDATION = "VALIDATION_ERROR"
    ALREADY_CLOCKED_IN = "ALREADY_CLOCKED_IN"
    ALREADY_CLOCKED_OUT = "ALREADY_CLOCKED_OUT"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    NO_CLOCK_IN_FOUND = "NO_CLOCK_IN_FOUND"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    MULTIPLE_RECORDS_FOUND = "MULTIPLE_RECORDS_FOUND"
    INSUFFICIENT_LEAVE_DAYS = "INSUFFICIENT_LEAVE_DAYS"
    CONFLICTING_LEAVE_REQUEST = "CONFLICTING_LEAVE_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
