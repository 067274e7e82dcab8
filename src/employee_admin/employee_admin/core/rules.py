from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .constants import DEFAULT_ANNUAL_LEAVE_ENTITLEMENT, DEFAULT_NORMAL_HOURS_PER_DAY


@dataclass(frozen=True)
class BusinessRules:
    """Per-deployment business values, resolved once at startup."""

    normal_hours_per_day: Decimal = DEFAULT_NORMAL_HOURS_PER_DAY
    annual_leave_entitlement: int = DEFAULT_ANNUAL_LEAVE_ENTITLEMENT
    enforce_status_transitions: bool = False

    def __post_init__(self):
        if self.normal_hours_per_day <= 0:
            raise ValueError("normal_hours_per_day must be positive")
        if self.annual_leave_entitlement < 0:
            raise ValueError("annual_leave_entitlement must not be negative")

    @classmethod
    def from_settings(cls, settings: Any) -> "BusinessRules":
        return cls(
            normal_hours_per_day=Decimal(str(getattr(settings, "NORMAL_HOURS_PER_DAY", DEFAULT_NORMAL_HOURS_PER_DAY))),
            annual_leave_entitlement=int(getattr(settings, "ANNUAL_LEAVE_ENTITLEMENT", DEFAULT_ANNUAL_LEAVE_ENTITLEMENT)),
            enforce_status_transitions=bool(getattr(settings, "ENFORCE_LEAVE_STATUS_TRANSITIONS", False)),
        )
