from __future__ import annotations

from pathlib import Path

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OPENWEATHER_API_KEY_ENV = "OPENWEATHER_API_KEY"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    # Read without the APP_ prefix; the variable name is shared with other tools.
    openweather_api_key: str = Field(default="", validation_alias=OPENWEATHER_API_KEY_ENV)

    weather_base_url: AnyHttpUrl = Field(
        default="https://api.openweathermap.org/data/2.5/weather"
    )
    weather_timeout_seconds: float = Field(default=10.0, ge=1.0, le=30.0)
    weather_user_agent: str = Field(
        default="cityweather/0.1 (contact: you@example.com)",
        min_length=3,
        max_length=256,
    )

    default_city: str = Field(default="Lahore", min_length=1, max_length=99)
    assets_dir: Path = Field(default=Path("."))

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"

    @property
    def weather_endpoint(self) -> str:
        return str(self.weather_base_url)


def load_settings() -> Settings:
    return Settings()
