from __future__ import annotations

from typing import Protocol


class EmployeeDirectory(Protocol):
    """Existence check for employees.

    Note (DIP): services depend on this interface only; employee management
    itself lives outside this package.
    """

    def exists(self, employee_id: int) -> bool:
        raise NotImplementedError
