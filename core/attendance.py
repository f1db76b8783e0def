"""
Sparse per-member attendance records.

An attendance record maps a year to a mapping of month index (0-11) to a
boolean. Any year or month that is missing reads as "not attended", so most
members carry only a handful of entries.
"""
from typing import Any, Dict, Iterable, Mapping, Tuple

Attendance = Dict[int, Dict[int, bool]]
Period = Iterable[Tuple[int, int]]


def is_attended(attendance: Mapping[int, Mapping[int, bool]], year: int, month: int) -> bool:
    """
    Returns the stored value for (year, month), or False if absent.
    Any year/month combination is valid to query.
    """
    months = attendance.get(year)
    if not months:
        return False
    return bool(months.get(month, False))


def set_attended(attendance: Mapping[int, Mapping[int, bool]], year: int, month: int, value: bool) -> Attendance:
    """
    Returns a new attendance mapping with (year, month) set to `value`.
    The input mapping is left untouched; other years and months are copied as-is.

    Precondition: 0 <= month <= 11.
    """
    updated: Attendance = {y: dict(months) for y, months in attendance.items()}
    months = updated.setdefault(year, {})
    months[month] = bool(value)
    return updated


def count_attended(attendance: Mapping[int, Mapping[int, bool]], period: Period) -> int:
    """Number of (year, month) pairs in `period` marked as attended."""
    return sum(1 for year, month in period if is_attended(attendance, year, month))


def merge_attendance(base: Mapping[int, Mapping[int, bool]], overrides: Mapping[Any, Mapping[Any, Any]]) -> Attendance:
    """Applies every entry of `overrides` on top of `base`."""
    merged: Attendance = {y: dict(months) for y, months in base.items()}
    for year, months in normalize_attendance(overrides).items():
        for month, value in months.items():
            merged = set_attended(merged, year, month, value)
    return merged


def normalize_attendance(raw: Mapping[Any, Mapping[Any, Any]]) -> Attendance:
    """
    Converts a decoded JSON mapping (string keys) into integer keys and
    boolean values. Months outside 0-11 are dropped, as are values that are
    not real booleans (a stored "false" string must not read as attended).
    """
    result: Attendance = {}
    if not raw:
        return result

    for year_key, months in raw.items():
        try:
            year = int(year_key)
        except (TypeError, ValueError):
            continue
        if not isinstance(months, Mapping):
            continue

        clean: Dict[int, bool] = {}
        for month_key, value in months.items():
            try:
                month = int(month_key)
            except (TypeError, ValueError):
                continue
            if 0 <= month <= 11 and isinstance(value, bool):
                clean[month] = value
        result[year] = clean
    return result
