"""
Period Calendar - Domain Service

Pure month arithmetic. Dates are compared at UTC-day granularity; the
day count of a month is computed arithmetically so no local timezone or
daylight-saving shift can affect it.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Tuple

from runrate.domain.entities.errors import FuturePeriodError, InvalidPeriodError

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidPeriodError(
            f"Month must be between 1 and 12, got {month}",
            {"month": month},
        )


def days_in_month(year: int, month: int) -> int:
    """Return 28, 29, 30 or 31 for the given month."""
    _check_month(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def previous_period(year: int, month: int) -> Tuple[int, int]:
    _check_month(month)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_period(year: int, month: int) -> Tuple[int, int]:
    _check_month(month)
    if month == 12:
        return year + 1, 1
    return year, month + 1


def month_name(month: int) -> str:
    _check_month(month)
    return _MONTH_NAMES[month - 1]


def validate_day(year: int, month: int, day: int) -> None:
    limit = days_in_month(year, month)
    if not 1 <= day <= limit:
        raise InvalidPeriodError(
            f"Day must be between 1 and {limit} for {year}-{month:02d}, got {day}",
            {"year": year, "month": month, "day": day},
        )


def _utc_today(now: datetime) -> date:
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def validate_not_future(
    now: datetime, year: int, month: int, day: Optional[int] = None
) -> None:
    """
    Reject periods that lie after ``now``.

    The month is compared at month granularity even when no day is given;
    when a day is given the full date must not be after today (UTC).
    A naive ``now`` is taken to already be in UTC.

    Raises:
        InvalidPeriodError: month outside 1..12 or day outside the month.
        FuturePeriodError: the month or the date is in the future.
    """
    _check_month(month)
    if day is not None:
        validate_day(year, month, day)

    today = _utc_today(now)
    if (year, month) > (today.year, today.month):
        raise FuturePeriodError(
            f"Requested period {year}-{month:02d} is in the future",
            {"year": year, "month": month, "today": today.isoformat()},
        )
    if day is not None and date(year, month, day) > today:
        raise FuturePeriodError(
            f"Requested date {year}-{month:02d}-{day:02d} is in the future",
            {"year": year, "month": month, "day": day, "today": today.isoformat()},
        )
