import threading
import time
from datetime import date

import pytest

from src.employee_admin.employee_admin.core.enums import LeaveStatus, LeaveType
from src.employee_admin.employee_admin.core.exceptions import (
    ConflictingLeaveRequest,
    EmployeeNotFound,
    InsufficientLeaveDays,
    InvalidStatusTransition,
    LeaveRequestNotFound,
    ValidationError,
)
from src.employee_admin.employee_admin.leaves.balance import LeaveBalanceLedger
from src.employee_admin.employee_admin.leaves.memory_leave_repository import InMemoryLeaveRequestRepository
from src.employee_admin.employee_admin.leaves.model import LeaveDecision, LeaveRequest, NewLeaveRequest
from src.employee_admin.employee_admin.leaves.service import LeaveRequestService

EMPLOYEE_ID = 7
OTHER_EMPLOYEE_ID = 8
UNKNOWN_EMPLOYEE_ID = 999


def new_request(start: date, end: date, employee_id: int = EMPLOYEE_ID, leave_type=LeaveType.ANNUAL):
    return NewLeaveRequest(employee_id=employee_id, leave_type=leave_type, start_date=start, end_date=end)


def seed(repo, start: date, end: date, days: int, status=LeaveStatus.APPROVED, employee_id: int = EMPLOYEE_ID):
    return repo.add(
        LeaveRequest(
            leave_request_id=None,
            employee_id=employee_id,
            leave_type=LeaveType.ANNUAL,
            start_date=start,
            end_date=end,
            days_requested=days,
            status=status,
        )
    )


def test_create_counts_business_days_and_starts_pending(leave_service, fixed_now):
    view = leave_service.create(new_request(date(2026, 1, 1), date(2026, 1, 7)))

    assert view.days_requested == 5
    assert view.status == LeaveStatus.PENDING
    assert view.created_at == fixed_now
    assert view.reviewed_at is None


def test_create_rejects_when_balance_is_short(leave_service, leave_repo):
    seed(leave_repo, date(2026, 2, 2), date(2026, 2, 27), days=20)

    with pytest.raises(InsufficientLeaveDays) as exc:
        leave_service.create(new_request(date(2026, 3, 2), date(2026, 3, 9)))

    assert exc.value.required == 6
    assert exc.value.available == 5
    assert len(leave_repo.get_by_employee(EMPLOYEE_ID)) == 1


def test_create_allows_exactly_remaining_days(leave_service, leave_repo):
    seed(leave_repo, date(2026, 2, 2), date(2026, 2, 27), days=20)

    view = leave_service.create(new_request(date(2026, 3, 2), date(2026, 3, 6)))

    assert view.days_requested == 5


def test_pending_requests_do_not_consume_balance(leave_service, leave_repo):
    seed(leave_repo, date(2026, 2, 2), date(2026, 2, 27), days=20, status=LeaveStatus.PENDING)
    seed(leave_repo, date(2026, 4, 6), date(2026, 4, 10), days=5, status=LeaveStatus.REJECTED)

    assert leave_service.balance(EMPLOYEE_ID, 2026).remaining == 25


def test_create_unknown_employee(leave_service):
    with pytest.raises(EmployeeNotFound):
        leave_service.create(new_request(date(2026, 1, 5), date(2026, 1, 6), employee_id=UNKNOWN_EMPLOYEE_ID))


def test_create_validates_dates(leave_service):
    with pytest.raises(ValidationError) as exc:
        leave_service.create(new_request(date(2025, 12, 10), date(2025, 12, 1)))

    assert set(exc.value.errors) == {"start_date", "end_date"}


def test_start_today_is_allowed(leave_service, fixed_today):
    view = leave_service.create(new_request(fixed_today, fixed_today))

    assert view.days_requested == 1


def test_weekend_only_request_is_zero_days(leave_service):
    view = leave_service.create(new_request(date(2026, 1, 3), date(2026, 1, 4)))

    assert view.days_requested == 0


def test_overlapping_request_conflicts(leave_service, leave_repo):
    seed(leave_repo, date(2026, 1, 12), date(2026, 1, 15), days=4, status=LeaveStatus.PENDING)

    with pytest.raises(ConflictingLeaveRequest):
        leave_service.create(new_request(date(2026, 1, 10), date(2026, 1, 12)))


def test_adjacent_request_does_not_conflict(leave_service, leave_repo):
    seed(leave_repo, date(2026, 1, 13), date(2026, 1, 15), days=3, status=LeaveStatus.PENDING)

    view = leave_service.create(new_request(date(2026, 1, 10), date(2026, 1, 12)))

    assert view.start_date == date(2026, 1, 10)


def test_rejected_requests_still_block_overlap(leave_service, leave_repo):
    seed(leave_repo, date(2026, 1, 12), date(2026, 1, 15), days=4, status=LeaveStatus.REJECTED)

    assert leave_service.has_conflict(EMPLOYEE_ID, date(2026, 1, 14), date(2026, 1, 20))


def test_has_conflict_is_per_employee_and_honours_exclude(leave_service, leave_repo):
    existing = seed(leave_repo, date(2026, 1, 12), date(2026, 1, 15), days=4, status=LeaveStatus.PENDING)

    assert not leave_service.has_conflict(OTHER_EMPLOYEE_ID, date(2026, 1, 12), date(2026, 1, 15))
    assert not leave_service.has_conflict(
        EMPLOYEE_ID, date(2026, 1, 12), date(2026, 1, 15), exclude_id=existing.leave_request_id
    )


def test_update_status_records_review(leave_service, fixed_now):
    created = leave_service.create(new_request(date(2026, 1, 5), date(2026, 1, 6)))

    view = leave_service.update_status(
        created.leave_request_id, LeaveDecision(LeaveStatus.APPROVED, manager_comments="enjoy")
    )

    assert view.status == LeaveStatus.APPROVED
    assert view.manager_comments == "enjoy"
    assert view.reviewed_at == fixed_now
    assert leave_service.balance(EMPLOYEE_ID, 2026).remaining == 23


def test_update_status_unknown_request(leave_service):
    with pytest.raises(LeaveRequestNotFound):
        leave_service.update_status(404, LeaveDecision(LeaveStatus.APPROVED))


def test_update_status_is_permissive_by_default(leave_service):
    created = leave_service.create(new_request(date(2026, 1, 5), date(2026, 1, 6)))
    leave_service.update_status(created.leave_request_id, LeaveDecision(LeaveStatus.REJECTED))

    view = leave_service.update_status(created.leave_request_id, LeaveDecision(LeaveStatus.APPROVED))

    assert view.status == LeaveStatus.APPROVED


def test_strict_mode_rejects_leaving_terminal_status(leave_repo, employees, fixed_today):
    service = LeaveRequestService(
        leave_repo,
        employees,
        ledger=LeaveBalanceLedger(leave_repo),
        enforce_status_transitions=True,
        local_today=lambda: fixed_today,
    )
    created = service.create(new_request(date(2026, 1, 5), date(2026, 1, 6)))
    service.update_status(created.leave_request_id, LeaveDecision(LeaveStatus.REJECTED))

    with pytest.raises(InvalidStatusTransition) as exc:
        service.update_status(created.leave_request_id, LeaveDecision(LeaveStatus.APPROVED))

    assert exc.value.current == "Rejected"
    assert exc.value.requested == "Approved"
    assert service.get_by_id(created.leave_request_id).status == LeaveStatus.REJECTED


def test_queries(leave_service):
    first = leave_service.create(new_request(date(2026, 1, 5), date(2026, 1, 6)))
    leave_service.create(new_request(date(2026, 1, 19), date(2026, 1, 20), leave_type=LeaveType.SICK))
    leave_service.create(new_request(date(2026, 1, 5), date(2026, 1, 6), employee_id=OTHER_EMPLOYEE_ID))
    leave_service.update_status(first.leave_request_id, LeaveDecision(LeaveStatus.APPROVED))

    assert len(leave_service.list_for_employee(EMPLOYEE_ID)) == 2
    assert len(leave_service.list_pending()) == 2
    assert [v.leave_request_id for v in leave_service.list_by_status(LeaveStatus.APPROVED)] == [
        first.leave_request_id
    ]
    assert leave_service.get_by_id(9999) is None


def test_balance_defaults_to_current_local_year(leave_service, leave_repo, fixed_today):
    seed(leave_repo, date(2025, 12, 22), date(2025, 12, 23), days=2)

    balance = leave_service.balance(EMPLOYEE_ID)

    assert balance.year == fixed_today.year
    assert balance.taken == 2


class SlowLeaveRepository(InMemoryLeaveRequestRepository):
    """Widens the read-then-write window so unguarded callers would race."""

    def find(self, predicate):
        rows = super().find(predicate)
        time.sleep(0.02)
        return rows


def test_concurrent_overlapping_requests_admit_one(employees, fixed_today):
    repo = SlowLeaveRepository()
    service = LeaveRequestService(repo, employees, local_today=lambda: fixed_today)
    outcomes = []
    barrier = threading.Barrier(4)

    def worker():
        barrier.wait()
        try:
            service.create(new_request(date(2026, 1, 5), date(2026, 1, 9)))
            outcomes.append("ok")
        except ConflictingLeaveRequest:
            outcomes.append("conflict")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict", "conflict", "conflict", "ok"]
    assert len(repo.get_by_employee(EMPLOYEE_ID)) == 1
