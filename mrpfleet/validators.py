"""Field validation rules used for incoming request data."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})(T00:00:00Z)?")
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class FieldError:
    """One failed validation rule on one field."""

    failed_field: str
    tag: str
    value: Any


def validate_struct(errors: Iterable[tuple[str, str, Any]]) -> list[FieldError]:
    """Turn raw ``(namespace, tag, value)`` validation failures into field errors."""
    return [FieldError(namespace, tag, value) for namespace, tag, value in errors]


def check_enum(value: str, param: str) -> bool:
    """Return whether ``value`` is one of the underscore-separated options in ``param``."""
    return value in param.split("_")


def validation_period(value: str) -> bool:
    """Return whether ``value`` is a period such as ``"Jan 2024"``."""
    if " " not in value:
        return False
    parts = value.split(" ")
    if len(parts) > 2:
        return False
    month, year = parts
    return (
        month in MONTH_ABBREVIATIONS
        and len(year) == 4
        and _INTEGER.fullmatch(year) is not None
    )


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def check_date_string(value: str) -> bool:
    """Return whether ``value`` is ``YYYY-MM-DD`` or ``YYYY-MM-DDT00:00:00Z``."""
    match = _DATE.fullmatch(value)
    if match is None:
        return False
    year, month, day = (int(group) for group in match.group(1, 2, 3))
    if not 1 <= month <= 12:
        return False
    days = _DAYS_IN_MONTH[month - 1]
    if month == 2 and _is_leap(year):
        days += 1
    return 1 <= day <= days