"""Open-Meteo forecast API client.

A failed request is surfaced once; there is no retry or backoff.
"""

import logging
from datetime import date

import httpx

from stargazer.config.schema import OPEN_METEO_FORECAST_URL

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "stargazer/0.1.0"
DAILY_FIELDS = ("weathercode", "moon_phase")
HOURLY_FIELDS = ("cloudcover",)


class ForecastFetchError(Exception):
    """Raised when a month's forecast cannot be retrieved."""

    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class TransportError(ForecastFetchError):
    """Non-success HTTP status or a failed request."""


class ApplicationError(ForecastFetchError):
    """HTTP success carrying an API-level error or an unusable body."""


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_FORECAST_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    def get_forecast(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
        timezone: str,
    ) -> dict:
        """Fetch daily weather code / moon phase and hourly cloud cover.

        Raises TransportError or ApplicationError.
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "timezone": timezone,
        }
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        logger.info(
            "Requesting forecast %s..%s for (%.2f, %.2f)",
            params["start_date"], params["end_date"], latitude, longitude,
        )
        try:
            resp = httpx.get(
                self.base_url, params=params, headers=headers, timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed: %s", e)
            raise TransportError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            reason = _error_reason(resp) or f"HTTP {resp.status_code}"
            logger.error("Open-Meteo returned %d: %s", resp.status_code, reason)
            raise TransportError(reason, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ApplicationError(f"Invalid JSON body: {e}", resp.status_code) from e

        if not isinstance(data, dict):
            raise ApplicationError("Unexpected response body", resp.status_code)
        if data.get("error"):
            reason = str(data.get("reason") or "Unknown API error")
            logger.error("Open-Meteo application error: %s", reason)
            raise ApplicationError(reason, resp.status_code)
        return data


def _error_reason(resp: httpx.Response) -> str | None:
    # Open-Meteo puts {"error": true, "reason": ...} on 400 responses too
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("reason"):
        return str(body["reason"])
    return None
