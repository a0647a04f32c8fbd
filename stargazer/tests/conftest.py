"""Shared test fixtures."""

import json
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from stargazer.config.defaults import DEFAULT_SITE
from stargazer.config.schema import StargazerConfig

# Frozen "today" at the site for provider and pipeline tests
TODAY = date(2026, 10, 19)

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def make_payload(
    start: date,
    days: list[tuple[int, str, int]],
    background_cloud: int = 50,
) -> dict:
    """Build an Open-Meteo body from (weathercode, moon_phase, cloud_at_21h) per day."""
    times, codes, phases, cloud = [], [], [], []
    for i, (code, phase, cloud_21) in enumerate(days):
        times.append((start + timedelta(days=i)).isoformat())
        codes.append(code)
        phases.append(phase)
        cloud.extend(cloud_21 if h == 21 else background_cloud for h in range(24))
    return {
        "timezone": "Asia/Tokyo",
        "daily": {"time": times, "weathercode": codes, "moon_phase": phases},
        "hourly": {"cloudcover": cloud},
    }


@pytest.fixture
def default_config() -> StargazerConfig:
    """Return default StargazerConfig with the default site."""
    return StargazerConfig(site=DEFAULT_SITE)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "forecast": {"horizon_days": 14},
        "scoring": {"observation_hour": 21},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def october_payload() -> dict:
    """Open-Meteo body for 2026-10-19..2026-10-31 (clamped to TODAY)."""
    with open(FIXTURE_DIR / "open_meteo_2026_10.json") as f:
        return json.load(f)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def payload_factory():
    return make_payload
