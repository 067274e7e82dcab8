from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


class ErrorCollector:
    """Accumulate per-field messages, then raise them together."""

    def __init__(self):
        self._errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    def check(self, condition: bool, field: str, message: str) -> None:
        if not condition:
            self.add(field, message)

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError(dict(self._errors))


def clean_notes(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None
