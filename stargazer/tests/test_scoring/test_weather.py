"""Tests for weather code labels and bonus."""

import pytest

from stargazer.scoring.weather import UNKNOWN_WEATHER, WEATHER_NAMES, weather_bonus, weather_name


class TestWeatherBonus:
    @pytest.mark.parametrize("code", [0, 1])
    def test_clear(self, code: int):
        assert weather_bonus(code) == 5

    @pytest.mark.parametrize("code", [2, 3, 4, 45, 48, 50])
    def test_neutral(self, code: int):
        assert weather_bonus(code) == 0

    @pytest.mark.parametrize("code", [51, 55, 61, 65, 71, 80, 95, 99])
    def test_precipitation(self, code: int):
        assert weather_bonus(code) == -10

    def test_boundary(self):
        assert weather_bonus(50) == 0
        assert weather_bonus(51) == -10


class TestWeatherName:
    def test_table_codes(self):
        assert set(WEATHER_NAMES) == {
            0, 1, 2, 3, 45, 48, 51, 53, 55, 61, 63, 65, 71, 73, 75, 80, 81, 82, 95,
        }

    def test_known(self):
        assert weather_name(0) == "快晴"
        assert weather_name(3) == "曇り"
        assert weather_name(95) == "雷雨"

    @pytest.mark.parametrize("code", [4, 56, 77, 96, 99])
    def test_unknown(self, code: int):
        assert weather_name(code) == UNKNOWN_WEATHER
