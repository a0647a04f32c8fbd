"""Forecast horizon and request window calculations."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from stargazer.models.common import month_bounds


@dataclass(frozen=True)
class RequestWindow:
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def site_today(timezone: str, now: datetime | None = None) -> date:
    """Local calendar date at the site."""
    tz = ZoneInfo(timezone)
    if now is None:
        now = datetime.now(tz)
    return now.astimezone(tz).date()


def horizon_end(today: date, horizon_days: int) -> date:
    return today + timedelta(days=horizon_days)


def request_window(
    year: int, month: int, today: date, horizon_days: int
) -> RequestWindow | None:
    """Clamp a calendar month to [today, today + horizon_days].

    Returns None when no date of the month can be requested: the month
    starts after the horizon, or ended before today.
    """
    month_start, month_end = month_bounds(year, month)
    last = horizon_end(today, horizon_days)
    if month_start > last:
        return None
    start = max(month_start, today)
    end = min(month_end, last)
    if start > end:
        return None
    return RequestWindow(start=start, end=end)
