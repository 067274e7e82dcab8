from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def add(self, request: LeaveRequest) -> LeaveRequest:
        raise NotImplementedError

    def update(self, request: LeaveRequest) -> bool:
        raise NotImplementedError

    def get_by_id(self, leave_request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find(self, predicate: Callable[[LeaveRequest], bool]) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get_by_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError
