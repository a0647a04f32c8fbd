"""Open-Meteo forecast data models."""

from dataclasses import dataclass, field
from datetime import date

from stargazer.models.common import HOURS_PER_DAY


@dataclass(frozen=True)
class DailyForecast:
    date: date
    weather_code: int | None
    moon_phase: str | None


@dataclass(frozen=True)
class DayForecast:
    """One calendar date's slice of a month forecast."""

    date: date
    weather_code: int | None
    moon_phase: str | None
    hourly_cloud_cover: list[int | float | None]

    def cloud_cover_at(self, hour: int) -> int | float | None:
        if 0 <= hour < len(self.hourly_cloud_cover):
            return self.hourly_cloud_cover[hour]
        return None


@dataclass(frozen=True)
class MonthForecast:
    """Forecast data resolved for one (year, month).

    daily[i] and hourly_cloud_cover[i*24:(i+1)*24] describe the same date.
    An empty forecast has no daily entries at all.
    """

    year: int
    month: int
    days_in_month: int
    is_empty: bool = False
    daily: list[DailyForecast] = field(default_factory=list)
    hourly_cloud_cover: list[int | float | None] = field(default_factory=list)
    fetched_at: str = ""

    def day_forecast(self, target: date) -> DayForecast | None:
        """Look up a date by value, never by offset from day 1.

        Returns None when the date has no forecast entry.
        """
        for i, entry in enumerate(self.daily):
            if entry.date != target:
                continue
            hourly = self.hourly_cloud_cover[i * HOURS_PER_DAY:(i + 1) * HOURS_PER_DAY]
            if len(hourly) != HOURS_PER_DAY:
                return None
            return DayForecast(
                date=entry.date,
                weather_code=entry.weather_code,
                moon_phase=entry.moon_phase,
                hourly_cloud_cover=hourly,
            )
        return None

    @property
    def forecast_dates(self) -> list[date]:
        return [d.date for d in self.daily]
