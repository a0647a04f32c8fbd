"""Stargazing calendar API: FastAPI backend for the calendar view."""

import os
from collections.abc import Callable
from datetime import date

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from stargazer.config.loader import default_config, load_config
from stargazer.config.schema import StargazerConfig
from stargazer.ingest.open_meteo_client import ForecastFetchError, OpenMeteoClient
from stargazer.pipeline.month_pipeline import build_pipeline
from stargazer.reporting.formatters import day_to_dict, month_to_dict


def create_app(
    config: StargazerConfig,
    client: OpenMeteoClient | None = None,
    today: Callable[[], date] | None = None,
) -> FastAPI:
    """Build the app around one pipeline; its forecast cache lives as long as the app."""
    pipeline = build_pipeline(config, client, today)

    app = FastAPI(title="Stargazing Calendar", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/months/{year}/{month}")
    def get_month(year: int, month: int):
        """Every day of a month with its score or an unavailable marker."""
        if not 1 <= month <= 12:
            raise HTTPException(404, f"Invalid month: {month}")
        try:
            report = pipeline.run(year, month)
        except ForecastFetchError as e:
            raise HTTPException(502, e.reason) from e
        except ValueError as e:
            raise HTTPException(404, str(e)) from e
        return month_to_dict(report)

    @app.get("/api/days/{year}/{month}/{day}")
    def get_day(year: int, month: int, day: int):
        """Detail view for one night."""
        try:
            date(year, month, day)
        except ValueError as e:
            raise HTTPException(404, str(e)) from e
        try:
            result = pipeline.day(year, month, day)
        except ForecastFetchError as e:
            raise HTTPException(502, e.reason) from e
        data = day_to_dict(result)
        data["observation_hour"] = pipeline.observation_hour
        return data

    @app.get("/api/config")
    def get_config():
        """Observing site and forecast settings."""
        return config.model_dump()

    return app


if __name__ == "__main__":
    import uvicorn

    config_path = os.environ.get("STARGAZER_CONFIG")
    config = load_config(config_path) if config_path else default_config()
    uvicorn.run(create_app(config), host="0.0.0.0", port=8777)
