# src/hikecast/features/hiking.py
"""
Hiking suitability index.

Converts one `WeatherReading` into a 0..10 score plus a recommendation tier.

Rules (thresholds and points come from `scoring.hiking` in config):
- Start from an integer baseline and subtract independent penalties; every rule that
  matches fires, nothing short-circuits.
- Hot and cold are mutually exclusive: a reading above the hot threshold never also
  counts as cold.
- The total is clamped to [min_score, max_score] before choosing a tier.
"""

from __future__ import annotations

from dataclasses import dataclass

from hikecast.config.settings import HikingSettings, Settings, get_settings
from hikecast.domain.models import HikingAssessment, WeatherReading
from hikecast.scoring.bounds import clamp


@dataclass(frozen=True)
class Penalty:
    """One rule that fired for a reading."""

    name: str
    points: int
    reason: str


def explain_hiking_index(reading: WeatherReading, *, settings: Settings | None = None) -> list[Penalty]:
    """Return every penalty that applies to `reading`, in rule order."""
    cfg = (settings or get_settings()).scoring.hiking
    limits = cfg.thresholds
    points = cfg.penalties

    fired: list[Penalty] = []
    if reading.temperature > limits.hot_above_c:
        fired.append(Penalty("hot", points.hot, f"Temperature {reading.temperature:.1f}°C above {limits.hot_above_c:g}°C"))
    elif reading.temperature < limits.cold_below_c:
        fired.append(Penalty("cold", points.cold, f"Temperature {reading.temperature:.1f}°C below {limits.cold_below_c:g}°C"))

    if reading.precipitation > limits.precipitation_above_mm:
        fired.append(
            Penalty("precipitation", points.precipitation, f"Precipitation {reading.precipitation:.1f} mm")
        )
    if reading.uv_index > limits.uv_above:
        fired.append(Penalty("uv", points.uv, f"UV index {reading.uv_index:.1f}"))
    if reading.aqi > limits.aqi_above:
        fired.append(Penalty("aqi", points.aqi, f"AQI {reading.aqi}"))
    if reading.cloud_cover > limits.cloud_cover_above_pct:
        fired.append(Penalty("cloud_cover", points.cloud_cover, f"Cloud cover {reading.cloud_cover}%"))
    return fired


def recommendation_for(score: float, cfg: HikingSettings) -> str:
    for tier in cfg.tiers:
        if score >= tier.min_score:
            return tier.recommendation
    return cfg.fallback_recommendation


def calculate_hiking_index(reading: WeatherReading, *, settings: Settings | None = None) -> HikingAssessment:
    """Score `reading` on the integer 0..10 scale and attach its recommendation tier."""
    settings = settings or get_settings()
    cfg = settings.scoring.hiking

    score = cfg.baseline - sum(p.points for p in explain_hiking_index(reading, settings=settings))
    score = clamp(score, cfg.min_score, cfg.max_score)

    return HikingAssessment(
        hiking_index=round(float(score), 1),
        hiking_recommendation=recommendation_for(score, cfg),
    )
