"""WMO weather code display names and the weather bonus."""

UNKNOWN_WEATHER = "不明"

WEATHER_NAMES: dict[int, str] = {
    0: "快晴",
    1: "晴れ",
    2: "一部曇",
    3: "曇り",
    45: "霧",
    48: "霧氷",
    51: "霧雨",
    53: "霧雨",
    55: "霧雨",
    61: "雨",
    63: "雨",
    65: "雨",
    71: "雪",
    73: "雪",
    75: "雪",
    80: "にわか雨",
    81: "にわか雨",
    82: "にわか雨",
    95: "雷雨",
}

CLEAR_CODES = frozenset({0, 1})
# 51 and above: drizzle, rain, snow, showers, thunderstorm
PRECIPITATION_MIN_CODE = 51

CLEAR_BONUS = 5
PRECIPITATION_PENALTY = -10


def weather_name(code: int) -> str:
    return WEATHER_NAMES.get(code, UNKNOWN_WEATHER)


def weather_bonus(code: int) -> int:
    if code in CLEAR_CODES:
        return CLEAR_BONUS
    if code >= PRECIPITATION_MIN_CODE:
        return PRECIPITATION_PENALTY
    return 0
