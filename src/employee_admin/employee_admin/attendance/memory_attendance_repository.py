from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Optional, Sequence

from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Dict-backed store. Does not enforce daily uniqueness by itself; the
    service's keyed lock does."""

    def __init__(self):
        self._rows: dict[int, AttendanceRecord] = {}
        self._next_id = 1
        self._mutex = threading.Lock()

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._mutex:
            saved = replace(record, attendance_id=self._next_id)
            self._rows[self._next_id] = saved
            self._next_id += 1
            return saved

    def update(self, record: AttendanceRecord) -> bool:
        with self._mutex:
            if record.attendance_id not in self._rows:
                return False
            self._rows[record.attendance_id] = record
            return True

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with self._mutex:
            return self._rows.get(int(attendance_id))

    def find(self, predicate: Callable[[AttendanceRecord], bool]) -> Sequence[AttendanceRecord]:
        with self._mutex:
            rows = list(self._rows.values())
        return sorted((r for r in rows if predicate(r)), key=lambda r: (r.work_date, r.attendance_id))

    def get_by_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self.find(lambda r: r.employee_id == int(employee_id))
