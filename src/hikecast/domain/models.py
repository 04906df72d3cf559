"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- API/CLI inputs (`Coordinate`)
- provider outputs (`WeatherReading`, `SunTimes`)
- locally derived values (`MoonPhase`, `HikingAssessment`)
- the one document returned to callers (`ConsolidatedResult`)

Every record is immutable and lives for a single request.
The field names are the JSON names the mobile client reads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coordinate(_Record):
    """A latitude/longitude pair, passed verbatim to the providers."""

    lat: str
    lon: str


class WeatherReading(_Record):
    """Current conditions plus air quality for one coordinate."""

    temperature: float
    precipitation: float
    cloud_cover: int
    uv_index: float
    aqi: int = 0


class SunTimes(_Record):
    """Local `HH:MM` times in the configured target zone."""

    sunrise: str
    sunset: str
    golden_hour_end: str


class MoonPhase(_Record):
    phase_name: str
    illumination: float = Field(..., ge=0, le=1)


class HikingAssessment(_Record):
    hiking_index: float = Field(..., ge=0, le=10)
    hiking_recommendation: str


class ConsolidatedResult(_Record):
    """Weather, sun, moon and hiking indices for one request."""

    weather: WeatherReading
    sun: SunTimes
    moon: MoonPhase
    indices: HikingAssessment
