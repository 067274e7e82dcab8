from __future__ import annotations

from ..core.constants import DEFAULT_ANNUAL_LEAVE_ENTITLEMENT
from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveFilter
from .repository import LeaveRequestRepository


class LeaveBalanceLedger:
    """Remaining annual entitlement, derived from approved history.

    Only approved requests count; a request is charged to the year of its
    start date. The result never goes below zero.
    """

    def __init__(self, leaves: LeaveRequestRepository, *, entitlement: int = DEFAULT_ANNUAL_LEAVE_ENTITLEMENT):
        self._leaves = leaves
        self._entitlement = int(entitlement)

    @property
    def entitlement(self) -> int:
        return self._entitlement

    def days_taken(self, employee_id: int, year: int) -> int:
        approved = self._leaves.find(
            LeaveFilter(employee_id=int(employee_id), status=LeaveStatus.APPROVED, start_year=int(year))
        )
        return sum(r.days_requested for r in approved)

    def remaining_days(self, employee_id: int, year: int) -> int:
        return max(0, self._entitlement - self.days_taken(employee_id, year))

    def summary(self, employee_id: int, year: int) -> LeaveBalance:
        taken = self.days_taken(employee_id, year)
        return LeaveBalance(
            employee_id=int(employee_id),
            year=int(year),
            entitlement=self._entitlement,
            taken=taken,
            remaining=max(0, self._entitlement - taken),
        )
