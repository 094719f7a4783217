from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cityweather.models.conditions import ConditionCategory

ASSETS_SUBDIR = "assets"


@dataclass(frozen=True)
class WeatherAssets:
    banner: Path
    icon: Path


# (banner, icon) relative to the assets directory.
ASSET_TABLE: dict[ConditionCategory, tuple[str, str]] = {
    ConditionCategory.THUNDERSTORM: (
        "weatherBanner/thunderStorm.jpg",
        "weatherLogos/thunderStorm.png",
    ),
    ConditionCategory.DRIZZLE: ("weatherBanner/rain.jpg", "weatherLogos/rain.png"),
    ConditionCategory.RAIN: ("weatherBanner/rain.jpg", "weatherLogos/rain.png"),
    ConditionCategory.SNOW: ("weatherBanner/snow.jpg", "weatherLogos/snow.png"),
    ConditionCategory.ATMOSPHERE: ("weatherBanner/fog.jpg", "weatherLogos/fog.png"),
    ConditionCategory.CLEAR: ("weatherBanner/clear.jpg", "weatherLogos/sunny.png"),
    ConditionCategory.CLOUDS: ("weatherBanner/clouds.jpg", "weatherLogos/clouds.png"),
    ConditionCategory.UNKNOWN: ("weatherBanner/clouds.jpg", "weatherLogos/clouds.png"),
}


def resolve_assets(category: ConditionCategory, base_dir: Path | str) -> WeatherAssets:
    banner, icon = ASSET_TABLE[category]
    root = Path(base_dir) / ASSETS_SUBDIR
    return WeatherAssets(banner=root / banner, icon=root / icon)
