"""Validation and normalization of date, time and datetime literals."""

from __future__ import annotations

from datetime import date, datetime
import re

from pricerulepy.diagnostics.errors import (
    InvalidDateLiteralError,
    InvalidDatetimeLiteralError,
    InvalidTimeLiteralError,
)

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$", re.ASCII)


def validate_date_literal(value: str) -> str:
    match = _DATE_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidDateLiteralError(f'Invalid date literal "{value}". Expected YYYY-MM-DD.')
    year, month, day = (int(part) for part in match.groups())
    try:
        date(year, month, day)
    except ValueError:
        raise InvalidDateLiteralError(f'Invalid date literal "{value}".') from None
    return match.group(0)


def normalize_time_literal(value: str, meridiem: str | None = None) -> str:
    """Return `HH:MM[:SS]` in 24-hour form.

    With a meridiem the hour must be 1-12 (12 AM is midnight, 12 PM is noon);
    without one it must be 0-23.
    """
    match = _TIME_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidTimeLiteralError(f'Invalid time literal "{value}". Expected HH:MM or HH:MM:SS.')

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) is not None else None
    if minutes > 59 or (seconds is not None and seconds > 59):
        raise InvalidTimeLiteralError(f'Invalid time literal "{value}".')

    if meridiem is not None:
        normalized_meridiem = meridiem.strip().upper()
        if normalized_meridiem not in ("AM", "PM"):
            raise InvalidTimeLiteralError(f'Invalid meridiem "{meridiem}" in time literal.')
        if not 1 <= hours <= 12:
            raise InvalidTimeLiteralError(f'Invalid time literal "{value}" for 12-hour clock.')
        if hours == 12:
            hours = 0 if normalized_meridiem == "AM" else 12
        elif normalized_meridiem == "PM":
            hours += 12
    elif hours > 23:
        raise InvalidTimeLiteralError(f'Invalid time literal "{value}".')

    parts = [f"{hours:02d}", f"{minutes:02d}"]
    if seconds is not None:
        parts.append(f"{seconds:02d}")
    return ":".join(parts)


def validate_datetime_literal(value: str) -> str:
    trimmed = value.strip()
    try:
        datetime.fromisoformat(trimmed)
    except ValueError:
        raise InvalidDatetimeLiteralError(f'Invalid datetime literal "{value}".') from None
    return trimmed
