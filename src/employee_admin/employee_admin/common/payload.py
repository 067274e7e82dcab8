"""Helpers that turn raw JSON/query values into typed command fields.

Each helper raises ``ValidationError`` naming the offending field, so the
HTTP layer reports bad input the same way the services do.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock, parse_iso_date, parse_iso_datetime

T = TypeVar("T")


def _convert(body: dict, field: str, parser: Callable[[str], T], message: str, *, required: bool) -> Optional[T]:
    raw = body.get(field)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return None
    try:
        return parser(raw)
    except (TypeError, ValueError):
        raise ValidationError.for_field(field, message)


def int_field(body: dict, field: str, *, required: bool = True) -> Optional[int]:
    return _convert(body, field, int, f"{field} must be an integer", required=required)


def date_field(body: dict, field: str, *, required: bool = True) -> Optional[date]:
    return _convert(body, field, lambda v: parse_iso_date(str(v)), f"{field} must be a YYYY-MM-DD date", required=required)


def datetime_field(body: dict, field: str, *, required: bool = True) -> Optional[datetime]:
    return _convert(
        body,
        field,
        lambda v: parse_iso_datetime(str(v)),
        f"{field} must be an ISO-8601 timestamp",
        required=required,
    )


def clock_field(body: dict, field: str) -> Optional[timedelta]:
    return _convert(body, field, lambda v: parse_clock(str(v)), f"{field} must be HH:MM or HH:MM:SS", required=False)


def enum_field(body: dict, field: str, parse: Callable[[str], T], *, required: bool = True) -> Optional[T]:
    return _convert(body, field, parse, f"{field} has an unknown value", required=required)


def text_field(body: dict, field: str) -> Optional[str]:
    raw: Any = body.get(field)
    return None if raw is None else str(raw)


def json_object(raw: Any) -> dict:
    """Request body as a dict; a missing body counts as empty."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError.for_field("body", "request body must be a JSON object")
    return raw
