from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Optional, Sequence

from .model import LeaveRequest
from .repository import LeaveRequestRepository


class InMemoryLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self):
        self._rows: dict[int, LeaveRequest] = {}
        self._next_id = 1
        self._mutex = threading.Lock()

    def add(self, request: LeaveRequest) -> LeaveRequest:
        with self._mutex:
            saved = replace(request, leave_request_id=self._next_id)
            self._rows[self._next_id] = saved
            self._next_id += 1
            return saved

    def update(self, request: LeaveRequest) -> bool:
        with self._mutex:
            if request.leave_request_id not in self._rows:
                return False
            self._rows[request.leave_request_id] = request
            return True

    def get_by_id(self, leave_request_id: int) -> Optional[LeaveRequest]:
        with self._mutex:
            return self._rows.get(int(leave_request_id))

    def find(self, predicate: Callable[[LeaveRequest], bool]) -> Sequence[LeaveRequest]:
        with self._mutex:
            rows = list(self._rows.values())
        return sorted((r for r in rows if predicate(r)), key=lambda r: (r.start_date, r.leave_request_id))

    def get_by_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self.find(lambda r: r.employee_id == int(employee_id))
