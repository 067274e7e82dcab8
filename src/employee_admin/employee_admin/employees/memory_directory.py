from __future__ import annotations

from collections.abc import Iterable

from .directory import EmployeeDirectory


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self, employee_ids: Iterable[int] = ()):
        self._ids = {int(i) for i in employee_ids}

    def exists(self, employee_id: int) -> bool:
        return int(employee_id) in self._ids
