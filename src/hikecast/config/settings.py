# src/hikecast/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/hikecast/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `HIKECAST_TIMEZONE`, `HIKECAST_LOG_LEVEL`)
- an external YAML file via `HIKECAST_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from hikecast.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `hikecast.config`."""
    text = resources.files("hikecast.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "HikeCast"
    # Target zone for formatted sun times.
    timezone: str = "Asia/Jakarta"
    http_timeout_seconds: float = Field(5, gt=0)
    log_level: str = "INFO"


class WeatherSettings(BaseModel):
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    air_quality_url: str = "https://air-quality-api.open-meteo.com/v1/air-quality"
    current_fields: list[str] = Field(
        default_factory=lambda: ["temperature_2m", "precipitation", "cloud_cover", "uv_index"]
    )
    aqi_field: str = "european_aqi"
    aqi_selection: Literal["latest", "current_hour"] = "current_hour"


class SunSettings(BaseModel):
    base_url: str = "https://api.sunrise-sunset.org/json"
    golden_hour_minutes: int = Field(60, ge=0)


class IngestionSettings(BaseModel):
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    sun: SunSettings = Field(default_factory=SunSettings)


class MoonSettings(BaseModel):
    synodic_month_days: float = Field(29.53058867, gt=0)
    reference_new_moon: datetime = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)

    @field_validator("reference_new_moon")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class AstronomySettings(BaseModel):
    moon: MoonSettings = Field(default_factory=MoonSettings)


class HikingPenalties(BaseModel):
    hot: int = 3
    cold: int = 2
    precipitation: int = 4
    uv: int = 2
    aqi: int = 3
    cloud_cover: int = 1


class HikingThresholds(BaseModel):
    hot_above_c: float = 33
    cold_below_c: float = 18
    precipitation_above_mm: float = 1.0
    uv_above: float = 8
    aqi_above: int = 100
    cloud_cover_above_pct: int = 80


class HikingTier(BaseModel):
    min_score: int
    recommendation: str


class HikingSettings(BaseModel):
    baseline: int = 10
    min_score: int = 0
    max_score: int = 10
    thresholds: HikingThresholds = Field(default_factory=HikingThresholds)
    penalties: HikingPenalties = Field(default_factory=HikingPenalties)
    # Checked in order; the first tier whose `min_score` is met wins.
    tiers: list[HikingTier] = Field(
        default_factory=lambda: [
            HikingTier(min_score=8, recommendation="excellent"),
            HikingTier(min_score=5, recommendation="fair, watch conditions"),
            HikingTier(min_score=3, recommendation="discouraged, non-ideal conditions"),
        ]
    )
    fallback_recommendation: str = "not recommended today"

    @field_validator("tiers")
    @classmethod
    def _sort_tiers(cls, tiers: list[HikingTier]) -> list[HikingTier]:
        return sorted(tiers, key=lambda t: t.min_score, reverse=True)


class ScoringSettings(BaseModel):
    hiking: HikingSettings = Field(default_factory=HikingSettings)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    astronomy: AstronomySettings = Field(default_factory=AstronomySettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small; everything else belongs in YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("HIKECAST_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    tz = os.getenv("HIKECAST_TIMEZONE")
    if tz:
        data.setdefault("app", {})["timezone"] = tz

    timeout = os.getenv("HIKECAST_HTTP_TIMEOUT_SECONDS")
    if timeout:
        data.setdefault("app", {})["http_timeout_seconds"] = float(timeout)

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("HIKECAST_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
