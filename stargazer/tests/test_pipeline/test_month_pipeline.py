"""Tests for the month pipeline: day alignment and scoring."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from stargazer.config.schema import StargazerConfig
from stargazer.ingest.forecast_provider import ForecastProvider
from stargazer.ingest.open_meteo_client import OpenMeteoClient, TransportError
from stargazer.models.score import ScoreTier
from stargazer.pipeline.month_pipeline import (
    MonthPipeline,
    build_pipeline,
    first_weekday,
    shift_month,
)

# Day of October 2026 -> expected total score from the fixture payload
OCTOBER_SCORES = {
    19: 89, 20: 13, 21: 63, 22: 95, 23: 41, 24: 29, 25: 0,
    26: 82, 27: 70, 28: 42, 29: 17, 30: 96, 31: 76,
}


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock(spec=OpenMeteoClient)


@pytest.fixture
def pipeline(mock_client: MagicMock, default_config: StargazerConfig, today: date):
    return build_pipeline(default_config, mock_client, today=lambda: today)


class TestRun:
    def test_current_month(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload

        report = pipeline.run(2026, 10)

        assert report.days_in_month == 31
        assert len(report.days) == 31
        assert report.first_weekday == 4  # Thursday
        assert report.is_empty is False
        assert report.available_days == 13
        for d in report.days:
            if d.day < 19:
                assert d.score is None
            else:
                assert d.score is not None
                assert d.score.total_score == OCTOBER_SCORES[d.day]

    def test_end_to_end_good_night(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        day19 = pipeline.run(2026, 10).days[18]
        assert day19.date == date(2026, 10, 19)
        assert day19.score.total_score == 89
        assert day19.score.tier == ScoreTier.GOOD
        assert day19.score.cloud_cover_percent == 20

    def test_best_day(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        best = pipeline.run(2026, 10).best_day
        assert best.day == 30
        assert best.score.total_score == 96

    def test_straddling_month_partial(self, pipeline: MonthPipeline, mock_client, payload_factory):
        mock_client.get_forecast.return_value = payload_factory(
            date(2026, 11, 1), [(0, "new_moon", 20), (61, "full_moon", 90)]
        )

        report = pipeline.run(2026, 11)

        assert report.days_in_month == 30
        assert report.first_weekday == 0  # Sunday
        assert report.days[0].score.total_score == 89
        assert report.days[1].score.total_score == 0
        assert report.days[1].score.tier == ScoreTier.BAD
        # Past the horizon: unavailable, not zero-scored
        assert all(d.score is None for d in report.days[2:])
        assert report.available_days == 2

    def test_month_beyond_horizon(self, pipeline: MonthPipeline, mock_client):
        report = pipeline.run(2026, 12)
        assert report.is_empty is True
        assert len(report.days) == 31
        assert report.available_days == 0
        assert report.first_weekday == 2
        mock_client.get_forecast.assert_not_called()

    def test_scores_recomputed_forecast_cached(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        r1 = pipeline.run(2026, 10)
        r2 = pipeline.run(2026, 10)
        assert r1 is not r2
        assert r1.days == r2.days
        assert mock_client.get_forecast.call_count == 1

    def test_fetch_error_propagates(self, pipeline: MonthPipeline, mock_client):
        mock_client.get_forecast.side_effect = TransportError("HTTP 500", 500)
        with pytest.raises(TransportError):
            pipeline.run(2026, 10)

    def test_custom_observation_hour(self, mock_client, default_config, today, october_payload):
        mock_client.get_forecast.return_value = october_payload
        provider = ForecastProvider(mock_client, default_config.site, today=lambda: today)
        report = MonthPipeline(provider, observation_hour=20).run(2026, 10)
        # Every non-21h hour in the fixture is 50% -> 40 + moon + weather
        assert report.days[18].score.cloud_cover_percent == 50
        assert report.days[18].score.total_score == 65


class TestDay:
    def test_available_day(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        result = pipeline.day(2026, 10, 22)
        assert result.available
        assert result.score.total_score == 95
        assert result.score.moon_phase_display_name == "上弦の月"
        assert result.score.weather_display_name == "晴れ"

    def test_day_before_today_unavailable(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        result = pipeline.day(2026, 10, 5)
        assert result.available is False
        assert result.score is None

    def test_invalid_day(self, pipeline: MonthPipeline):
        with pytest.raises(ValueError):
            pipeline.day(2026, 11, 31)

    def test_day_uses_month_cache(self, pipeline: MonthPipeline, mock_client, october_payload):
        mock_client.get_forecast.return_value = october_payload
        pipeline.run(2026, 10)
        pipeline.day(2026, 10, 30)
        assert mock_client.get_forecast.call_count == 1


class TestBuildPipeline:
    def test_requires_site(self):
        with pytest.raises(ValueError, match="site"):
            build_pipeline(StargazerConfig())

    def test_wires_config(self, default_config: StargazerConfig):
        config = default_config.model_copy(
            update={"scoring": default_config.scoring.model_copy(update={"observation_hour": 22})}
        )
        pipeline = build_pipeline(config)
        assert pipeline.observation_hour == 22
        assert pipeline.provider.horizon_days == 14
        assert pipeline.provider.client.base_url == config.forecast.base_url


class TestCalendarHelpers:
    def test_first_weekday_sunday_first(self):
        assert first_weekday(2026, 11) == 0
        assert first_weekday(2026, 10) == 4
        assert first_weekday(2026, 8) == 6

    @pytest.mark.parametrize(
        "year, month, delta, expected",
        [
            (2026, 10, 1, (2026, 11)),
            (2026, 12, 1, (2027, 1)),
            (2026, 1, -1, (2025, 12)),
            (2026, 10, 0, (2026, 10)),
            (2026, 10, -22, (2024, 12)),
        ],
    )
    def test_shift_month(self, year, month, delta, expected):
        assert shift_month(year, month, delta) == expected
