"""Common types and helpers shared across models."""

import calendar
from datetime import UTC, date, datetime
from typing import TypeAlias

MonthKey: TypeAlias = str

HOURS_PER_DAY = 24


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def month_key(year: int, month: int) -> MonthKey:
    """Cache key for a calendar month, unpadded: (2026, 3) -> '2026-3'."""
    return f"{year}-{month}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar date of a month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))
