"""Month pipeline: align calendar days to forecast entries and score them."""

import logging
from collections.abc import Callable
from datetime import date

from stargazer.config.schema import StargazerConfig
from stargazer.ingest.forecast_provider import ForecastProvider
from stargazer.ingest.open_meteo_client import OpenMeteoClient
from stargazer.models.common import days_in_month
from stargazer.models.forecast import MonthForecast
from stargazer.models.score import DayResult, MonthReport
from stargazer.scoring.scorer import DEFAULT_OBSERVATION_HOUR, score_day

logger = logging.getLogger(__name__)


class MonthPipeline:
    def __init__(
        self,
        provider: ForecastProvider,
        observation_hour: int = DEFAULT_OBSERVATION_HOUR,
    ):
        self.provider = provider
        self.observation_hour = observation_hour

    def run(self, year: int, month: int) -> MonthReport:
        """Score every calendar day of a month.

        Days without a forecast entry are reported as unavailable. Scores
        are recomputed on every call; only the forecast is cached.
        """
        forecast = self.provider.get_month_forecast(year, month)
        report = MonthReport(
            year=year,
            month=month,
            days_in_month=forecast.days_in_month,
            first_weekday=first_weekday(year, month),
            is_empty=forecast.is_empty,
        )
        for day in range(1, forecast.days_in_month + 1):
            report.days.append(self._day_result(forecast, date(year, month, day)))

        logger.info(
            "Scored %d-%02d: %d of %d days available",
            year, month, report.available_days, report.days_in_month,
        )
        return report

    def day(self, year: int, month: int, day: int) -> DayResult:
        """Score a single day for the detail view.

        Raises ValueError for a day outside the month.
        """
        if not 1 <= day <= days_in_month(year, month):
            raise ValueError(f"{year}-{month:02d} has no day {day}")
        forecast = self.provider.get_month_forecast(year, month)
        return self._day_result(forecast, date(year, month, day))

    def _day_result(self, forecast: MonthForecast, target: date) -> DayResult:
        if forecast.is_empty:
            return DayResult(day=target.day, date=target, score=None)
        return DayResult(
            day=target.day,
            date=target,
            score=score_day(forecast.day_forecast(target), self.observation_hour),
        )


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st with Sunday = 0, for a Sunday-first calendar grid."""
    return (date(year, month, 1).weekday() + 1) % 7


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move by delta months, e.g. (2026, 1, -1) -> (2025, 12)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_pipeline(
    config: StargazerConfig,
    client: OpenMeteoClient | None = None,
    today: Callable[[], date] | None = None,
) -> MonthPipeline:
    """Wire one session's client, provider and pipeline from config."""
    if config.site is None:
        raise ValueError("No observing site configured")
    if client is None:
        client = OpenMeteoClient(
            base_url=config.forecast.base_url,
            user_agent=config.forecast.user_agent,
            timeout=config.forecast.timeout_seconds,
        )
    provider = ForecastProvider(
        client,
        config.site,
        horizon_days=config.forecast.horizon_days,
        today=today,
    )
    return MonthPipeline(provider, observation_hour=config.scoring.observation_hour)
