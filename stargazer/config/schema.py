"""Pydantic v2 configuration schema with strict validation."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class SiteConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    timezone: str = "Asia/Tokyo"

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown IANA timezone: {value}") from e
        return value


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPEN_METEO_FORECAST_URL
    # Open-Meteo serves 16 days including today, so today + 15 is the last one
    horizon_days: int = Field(default=14, ge=1, le=15)
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    user_agent: str = "stargazer/0.1.0"


class ScoringConfig(BaseModel):
    model_config = {"extra": "forbid"}

    observation_hour: int = Field(default=21, ge=0, le=23)


class StargazerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    site: SiteConfig | None = None
    forecast: ForecastConfig = ForecastConfig()
    scoring: ScoringConfig = ScoringConfig()
