"""Stargazing score models."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class MoonPhase(StrEnum):
    NEW_MOON = "new_moon"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL_MOON = "full_moon"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"


class MoonCategory(StrEnum):
    NEW = "new"
    CRESCENT = "crescent"
    QUARTER = "quarter"
    GIBBOUS = "gibbous"
    FULL = "full"


class ScoreTier(StrEnum):
    GOOD = "good"
    NORMAL = "normal"
    BAD = "bad"


GOOD_THRESHOLD = 80
NORMAL_THRESHOLD = 50


def score_tier(total_score: int) -> ScoreTier:
    if total_score >= GOOD_THRESHOLD:
        return ScoreTier.GOOD
    if total_score >= NORMAL_THRESHOLD:
        return ScoreTier.NORMAL
    return ScoreTier.BAD


@dataclass(frozen=True)
class DayScore:
    total_score: int
    cloud_cover_percent: int | float
    moon_phase_display_name: str
    weather_display_name: str
    cloud_term: int = 0
    moon_term: int = 0
    weather_bonus: int = 0

    @property
    def tier(self) -> ScoreTier:
        return score_tier(self.total_score)


@dataclass(frozen=True)
class DayResult:
    """A calendar day tagged with its score, or None when no forecast exists."""

    day: int
    date: date
    score: DayScore | None

    @property
    def available(self) -> bool:
        return self.score is not None


@dataclass
class MonthReport:
    year: int
    month: int
    days_in_month: int
    first_weekday: int  # 0 = Sunday
    is_empty: bool
    days: list[DayResult] = field(default_factory=list)

    @property
    def available_days(self) -> int:
        return sum(1 for d in self.days if d.available)

    @property
    def best_day(self) -> DayResult | None:
        scored = [d for d in self.days if d.score is not None]
        if not scored:
            return None
        # Earliest date wins ties
        return max(scored, key=lambda d: (d.score.total_score, -d.day))
