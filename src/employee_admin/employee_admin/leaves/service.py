from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Optional

from ..common.business_days import count_business_days
from ..common.datetime_utils import today, utc_now
from ..common.locks import KeyedLock
from ..common.validators import ErrorCollector, clean_notes
from ..core.enums import LeaveStatus
from ..core.exceptions import (
    ConflictingLeaveRequest,
    EmployeeNotFound,
    InsufficientLeaveDays,
    InvalidStatusTransition,
    LeaveRequestNotFound,
)
from ..employees.directory import EmployeeDirectory
from .balance import LeaveBalanceLedger
from .model import LeaveBalance, LeaveDecision, LeaveFilter, LeaveRequest, LeaveRequestView, NewLeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Use case: leave request lifecycle (create, review, query)."""

    def __init__(
        self,
        leaves: LeaveRequestRepository,
        employees: EmployeeDirectory,
        *,
        ledger: Optional[LeaveBalanceLedger] = None,
        enforce_status_transitions: bool = False,
        locks: Optional[KeyedLock] = None,
        clock: Callable = utc_now,
        local_today: Callable[[], date] = today,
    ):
        self._leaves = leaves
        self._employees = employees
        self._ledger = ledger or LeaveBalanceLedger(leaves)
        self._enforce_transitions = bool(enforce_status_transitions)
        self._locks = locks or KeyedLock()
        self._clock = clock
        self._today = local_today

    def create(self, data: NewLeaveRequest) -> LeaveRequestView:
        if not self._employees.exists(int(data.employee_id)):
            raise EmployeeNotFound(int(data.employee_id))

        errors = ErrorCollector()
        errors.check(data.end_date >= data.start_date, "end_date", "end_date must be on or after start_date")
        errors.check(data.start_date >= self._today(), "start_date", "start_date cannot be in the past")
        errors.raise_if_any()

        days_requested = count_business_days(data.start_date, data.end_date)

        # Balance and overlap checks plus the insert run as one step per employee.
        with self._locks.hold(int(data.employee_id)):
            remaining = self._ledger.remaining_days(data.employee_id, data.start_date.year)
            if days_requested > remaining:
                logger.info(
                    "Rejected leave for employee %s: %d days requested, %d available",
                    data.employee_id,
                    days_requested,
                    remaining,
                )
                raise InsufficientLeaveDays(days_requested, remaining)

            if self.has_conflict(data.employee_id, data.start_date, data.end_date):
                logger.info(
                    "Rejected leave for employee %s: %s..%s overlaps an existing request",
                    data.employee_id,
                    data.start_date,
                    data.end_date,
                )
                raise ConflictingLeaveRequest(data.start_date, data.end_date)

            now = self._clock()
            saved = self._leaves.add(
                LeaveRequest(
                    leave_request_id=None,
                    employee_id=int(data.employee_id),
                    leave_type=data.leave_type,
                    start_date=data.start_date,
                    end_date=data.end_date,
                    days_requested=days_requested,
                    status=LeaveStatus.PENDING,
                    reason=clean_notes(data.reason),
                    created_at=now,
                    updated_at=now,
                )
            )
            logger.info(
                "Leave request %s created for employee %s (%d business days)",
                saved.leave_request_id,
                saved.employee_id,
                days_requested,
            )
            return LeaveRequestView.from_request(saved)

    def has_conflict(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Any existing request (whatever its status) sharing a calendar day."""
        return any(
            (exclude_id is None or r.leave_request_id != exclude_id) and r.overlaps(start_date, end_date)
            for r in self._leaves.find(LeaveFilter(employee_id=int(employee_id)))
        )

    def update_status(self, leave_request_id: int, decision: LeaveDecision) -> LeaveRequestView:
        current = self._leaves.get_by_id(int(leave_request_id))
        if current is None:
            raise LeaveRequestNotFound(int(leave_request_id))

        if self._enforce_transitions and not current.status.can_transition_to(decision.status):
            raise InvalidStatusTransition(current.status.value, decision.status.value)

        now = self._clock()
        updated = replace(
            current,
            status=decision.status,
            manager_comments=clean_notes(decision.manager_comments),
            reviewed_at=now,
            updated_at=now,
        )
        self._leaves.update(updated)
        logger.info(
            "Leave request %s: %s -> %s",
            updated.leave_request_id,
            current.status.value,
            updated.status.value,
        )
        return LeaveRequestView.from_request(updated)

    def balance(self, employee_id: int, year: Optional[int] = None) -> LeaveBalance:
        """Balance for ``year``, defaulting to the current local year."""
        return self._ledger.summary(employee_id, self._today().year if year is None else year)

    def get_by_id(self, leave_request_id: int) -> Optional[LeaveRequestView]:
        request = self._leaves.get_by_id(int(leave_request_id))
        return LeaveRequestView.from_request(request) if request else None

    def list_for_employee(self, employee_id: int) -> list[LeaveRequestView]:
        return [LeaveRequestView.from_request(r) for r in self._leaves.get_by_employee(int(employee_id))]

    def list_by_status(self, status: LeaveStatus) -> list[LeaveRequestView]:
        return [LeaveRequestView.from_request(r) for r in self._leaves.find(LeaveFilter(status=status))]

    def list_pending(self) -> list[LeaveRequestView]:
        return self.list_by_status(LeaveStatus.PENDING)
