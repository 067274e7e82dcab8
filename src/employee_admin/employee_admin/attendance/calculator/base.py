from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class WorkedHours:
    worked: Decimal
    overtime: Decimal


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def calculate(
        self,
        *,
        clock_in: Optional[timedelta],
        clock_out: Optional[timedelta],
        break_duration: Optional[timedelta] = None,
    ) -> Optional[WorkedHours]:
        """Return None when either clock time is missing."""
        raise NotImplementedError
