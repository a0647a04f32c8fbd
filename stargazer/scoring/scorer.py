"""Stargazing index: cloud cover, moon phase and weather into a 0-100 score."""

import math

from stargazer.models.forecast import DayForecast
from stargazer.models.score import DayScore
from stargazer.scoring.moon import moon_phase_name, moon_term
from stargazer.scoring.weather import weather_bonus, weather_name

CLOUD_WEIGHT = 0.8
MIN_SCORE = 0
MAX_SCORE = 100
DEFAULT_OBSERVATION_HOUR = 21


def clamp_score(raw: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, raw))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def cloud_term(cloud_cover: float) -> int:
    """0 (overcast) to 80 (clear)."""
    return round_half_up((100 - cloud_cover) * CLOUD_WEIGHT)


def score(cloud_cover: float, moon_phase: str, weather_code: int) -> DayScore:
    """Compute the stargazing index for one night.

    Args:
        cloud_cover: Cloud cover percentage at the observation hour.
        moon_phase: Open-Meteo moon phase token, e.g. "waxing_crescent".
        weather_code: WMO weather code for the day.

    Returns:
        DayScore with the total clamped to [0, 100].
    """
    clouds = cloud_term(cloud_cover)
    moon = moon_term(moon_phase)
    bonus = weather_bonus(weather_code)
    total = clamp_score(clouds + moon + bonus)
    return DayScore(
        total_score=total,
        cloud_cover_percent=cloud_cover,
        moon_phase_display_name=moon_phase_name(moon_phase),
        weather_display_name=weather_name(weather_code),
        cloud_term=clouds,
        moon_term=moon,
        weather_bonus=bonus,
    )


def score_day(
    day: DayForecast | None, observation_hour: int = DEFAULT_OBSERVATION_HOUR
) -> DayScore | None:
    """Score a day's forecast slice, or None when any input is missing."""
    if day is None:
        return None
    cloud_cover = day.cloud_cover_at(observation_hour)
    if cloud_cover is None or day.moon_phase is None or day.weather_code is None:
        return None
    return score(cloud_cover, day.moon_phase, day.weather_code)
