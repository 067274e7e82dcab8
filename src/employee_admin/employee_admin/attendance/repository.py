from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Generic store contract for attendance records.

    ``add`` returns the record with its store-assigned id. Implementations
    backed by a database should enforce uniqueness of (employee_id, work_date)
    and raise ``DuplicateRecord`` when it is violated.
    """

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find(self, predicate: Callable[[AttendanceRecord], bool]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
