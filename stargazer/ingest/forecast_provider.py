"""Forecast provider: resolves a calendar month to cached Open-Meteo data."""

import logging
import threading
from collections.abc import Callable
from datetime import MAXYEAR, MINYEAR, date

from stargazer.config.schema import SiteConfig
from stargazer.ingest.horizon import horizon_end, request_window, site_today
from stargazer.ingest.open_meteo_client import ApplicationError, OpenMeteoClient
from stargazer.models.common import (
    HOURS_PER_DAY,
    MonthKey,
    days_in_month,
    month_key,
    utc_now_iso,
)
from stargazer.models.forecast import DailyForecast, MonthForecast

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 14


class ForecastProvider:
    """Owns the per-session month cache.

    Each (year, month) is fetched at most once; failures are not cached.
    Concurrent callers asking for the same unresolved month wait on a
    per-month lock instead of issuing a second request.
    """

    def __init__(
        self,
        client: OpenMeteoClient,
        site: SiteConfig,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        today: Callable[[], date] | None = None,
    ):
        self.client = client
        self.site = site
        self.horizon_days = horizon_days
        self._today = today or (lambda: site_today(site.timezone))
        self._cache: dict[MonthKey, MonthForecast] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[MonthKey, threading.Lock] = {}

    def get_month_forecast(self, year: int, month: int) -> MonthForecast:
        """Return the forecast for a month, fetching on first request.

        Raises ForecastFetchError when the API is unreachable or reports an
        error. Months with no requestable dates resolve to an empty forecast
        without any network call.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        if not MINYEAR <= year <= MAXYEAR:
            raise ValueError(f"year must be in {MINYEAR}..{MAXYEAR}, got {year}")

        key = month_key(year, month)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Forecast cache hit for %s", key)
            return cached

        with self._key_lock(key):
            # Another caller may have resolved it while we waited
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            forecast = self._resolve(year, month)
            with self._lock:
                self._cache[key] = forecast
            return forecast

    def cached_months(self) -> list[MonthKey]:
        with self._lock:
            return list(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _key_lock(self, key: MonthKey) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _resolve(self, year: int, month: int) -> MonthForecast:
        today = self._today()
        window = request_window(year, month, today, self.horizon_days)
        if window is None:
            logger.info(
                "No forecast dates for %d-%02d (today %s, horizon end %s)",
                year, month, today, horizon_end(today, self.horizon_days),
            )
            return MonthForecast(
                year=year,
                month=month,
                days_in_month=days_in_month(year, month),
                is_empty=True,
                fetched_at=utc_now_iso(),
            )

        raw = self.client.get_forecast(
            self.site.latitude,
            self.site.longitude,
            window.start,
            window.end,
            self.site.timezone,
        )
        forecast = parse_month_forecast(raw, year, month)
        logger.info(
            "Fetched %d forecast days for %d-%02d (%s..%s)",
            len(forecast.daily), year, month, window.start, window.end,
        )
        return forecast


def parse_month_forecast(raw: dict, year: int, month: int) -> MonthForecast:
    """Build a MonthForecast from an Open-Meteo response body.

    Raises ApplicationError when the arrays are missing or misaligned.
    """
    daily = raw.get("daily")
    hourly = raw.get("hourly")
    if not isinstance(daily, dict) or not isinstance(hourly, dict):
        raise ApplicationError("Response is missing daily or hourly data")

    times = daily.get("time") or []
    codes = daily.get("weathercode") or []
    phases = daily.get("moon_phase") or []
    cloud = hourly.get("cloudcover") or []

    if not (len(times) == len(codes) == len(phases)):
        raise ApplicationError(
            f"Daily arrays misaligned: {len(times)} dates, "
            f"{len(codes)} weather codes, {len(phases)} moon phases"
        )
    if len(cloud) != len(times) * HOURS_PER_DAY:
        raise ApplicationError(
            f"Expected {len(times) * HOURS_PER_DAY} hourly cloud cover values, "
            f"got {len(cloud)}"
        )

    entries: list[DailyForecast] = []
    try:
        for t, code, phase in zip(times, codes, phases, strict=True):
            entries.append(
                DailyForecast(
                    date=date.fromisoformat(t),
                    weather_code=None if code is None else int(code),
                    moon_phase=None if phase is None else str(phase),
                )
            )
        # Gaps stay None so the day reads as unavailable, not as 0% cloud
        hourly_cloud = [None if c is None else _percent(c) for c in cloud]
    except (TypeError, ValueError) as e:
        raise ApplicationError(f"Malformed forecast values: {e}") from e

    return MonthForecast(
        year=year,
        month=month,
        days_in_month=days_in_month(year, month),
        is_empty=False,
        daily=entries,
        hourly_cloud_cover=hourly_cloud,
        fetched_at=utc_now_iso(),
    )


def _percent(value) -> int | float:
    # Fractional cover is kept as sent; the scorer does the only rounding
    if isinstance(value, bool):
        raise TypeError(f"cloud cover must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    return float(value)
