from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: an employee's leave request over an inclusive date range."""

    leave_request_id: Optional[int]
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_requested: int
    status: LeaveStatus = LeaveStatus.PENDING
    reason: Optional[str] = None
    manager_comments: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def overlaps(self, start_date: date, end_date: date) -> bool:
        """Closed-interval overlap: touching boundaries count."""
        return self.start_date <= end_date and self.end_date >= start_date


@dataclass(frozen=True)
class NewLeaveRequest:
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str] = None


@dataclass(frozen=True)
class LeaveDecision:
    status: LeaveStatus
    manager_comments: Optional[str] = None


@dataclass(frozen=True)
class LeaveFilter:
    """Predicate over leave requests (callable; translatable to SQL)."""

    employee_id: Optional[int] = None
    status: Optional[LeaveStatus] = None
    start_year: Optional[int] = None

    def __call__(self, request: LeaveRequest) -> bool:
        if self.employee_id is not None and request.employee_id != self.employee_id:
            return False
        if self.status is not None and request.status != self.status:
            return False
        if self.start_year is not None and request.start_date.year != self.start_year:
            return False
        return True


@dataclass(frozen=True)
class LeaveBalance:
    employee_id: int
    year: int
    entitlement: int
    taken: int
    remaining: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "entitlement": self.entitlement,
            "taken": self.taken,
            "remaining": self.remaining,
        }


@dataclass(frozen=True)
class LeaveRequestView:
    leave_request_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_requested: int
    status: LeaveStatus
    reason: Optional[str]
    manager_comments: Optional[str]
    reviewed_at: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_request(cls, request: LeaveRequest) -> "LeaveRequestView":
        if request.leave_request_id is None:
            raise ValueError("Cannot build a view of an unsaved leave request")
        return cls(
            leave_request_id=request.leave_request_id,
            employee_id=request.employee_id,
            leave_type=request.leave_type,
            start_date=request.start_date,
            end_date=request.end_date,
            days_requested=request.days_requested,
            status=request.status,
            reason=request.reason,
            manager_comments=request.manager_comments,
            reviewed_at=request.reviewed_at,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.leave_request_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "days_requested": self.days_requested,
            "status": self.status.value,
            "reason": self.reason,
            "manager_comments": self.manager_comments,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
