from __future__ import annotations

from enum import Enum


class ConditionCategory(str, Enum):
    THUNDERSTORM = "thunderstorm"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    ATMOSPHERE = "atmosphere"
    CLEAR = "clear"
    CLOUDS = "clouds"
    UNKNOWN = "unknown"


# Inclusive ranges of OpenWeatherMap condition ids.
CONDITION_RANGES: list[tuple[int, int, ConditionCategory]] = [
    (200, 232, ConditionCategory.THUNDERSTORM),
    (300, 321, ConditionCategory.DRIZZLE),
    (500, 531, ConditionCategory.RAIN),
    (600, 622, ConditionCategory.SNOW),
    (701, 781, ConditionCategory.ATMOSPHERE),
    (800, 800, ConditionCategory.CLEAR),
    (801, 804, ConditionCategory.CLOUDS),
]


def classify_condition(code: int) -> ConditionCategory:
    for low, high, category in CONDITION_RANGES:
        if low <= code <= high:
            return category
    return ConditionCategory.UNKNOWN
