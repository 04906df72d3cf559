"""
Weather ingestion client (Open-Meteo).

A reading is built from two upstream calls with different freshness:
- forecast API `current` block: temperature, precipitation, cloud cover, UV index
- air-quality API: European AQI, either as a `current` value or an `hourly` series

The forecast call is required; any failure there surfaces as an `UpstreamError`.
The air-quality call is best-effort: when it fails the reading carries `aqi=0`.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Any

from hikecast.config.settings import Settings, WeatherSettings
from hikecast.core.errors import UpstreamDecodeError, UpstreamError
from hikecast.core.http import get_json, translate_http_errors
from hikecast.core.time import utc_now
from hikecast.domain.models import Coordinate, WeatherReading

logger = logging.getLogger(__name__)

WEATHER_PROVIDER = "weather"
AIR_QUALITY_PROVIDER = "air-quality"


def _number(current: dict[str, Any], key: str) -> float:
    value = current.get(key)
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise UpstreamDecodeError(WEATHER_PROVIDER, f"field {key!r} is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise UpstreamDecodeError(WEATHER_PROVIDER, f"field {key!r} is not finite: {value!r}")
    return number


def parse_current_conditions(payload: Any) -> WeatherReading:
    """Build an AQI-less reading from a forecast API response."""
    current = payload.get("current") if isinstance(payload, dict) else None
    if not isinstance(current, dict):
        raise UpstreamDecodeError(WEATHER_PROVIDER, "response has no 'current' object")

    return WeatherReading(
        temperature=_number(current, "temperature_2m"),
        precipitation=_number(current, "precipitation"),
        cloud_cover=int(round(_number(current, "cloud_cover"))),
        uv_index=_number(current, "uv_index"),
    )


def _as_aqi(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise UpstreamDecodeError(AIR_QUALITY_PROVIDER, f"AQI value is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise UpstreamDecodeError(AIR_QUALITY_PROVIDER, f"AQI value is not finite: {value!r}")
    return int(round(number))


def extract_aqi(payload: Any, *, field: str, selection: str = "latest", now: datetime | None = None) -> int:
    """Normalize either air-quality response shape into one AQI integer.

    - `current.<field>` wins when present.
    - Otherwise `hourly.<field>` is used: the sample for the current local hour when
      `selection == "current_hour"` (the series is indexed by local hour, shifted by
      `utc_offset_seconds`), else the most recent non-null sample.
    - No usable value -> 0.

    Raises:
        UpstreamDecodeError: If the payload is not an object or a value is not numeric.
    """
    if not isinstance(payload, dict):
        raise UpstreamDecodeError(AIR_QUALITY_PROVIDER, "response is not a JSON object")

    current = payload.get("current")
    if isinstance(current, dict) and current.get(field) is not None:
        return _as_aqi(current[field])

    hourly = payload.get("hourly")
    if not isinstance(hourly, dict):
        return 0
    series = hourly.get(field)
    if not isinstance(series, list) or not series:
        return 0

    if selection == "current_hour":
        times = hourly.get("time")
        if isinstance(times, list):
            try:
                offset = int(payload.get("utc_offset_seconds") or 0)
            except (TypeError, ValueError, OverflowError):
                offset = 0
            local_now = (now or utc_now()) + timedelta(seconds=offset)
            key = local_now.strftime("%Y-%m-%dT%H:00")
            if key in times:
                idx = times.index(key)
                if idx < len(series) and series[idx] is not None:
                    return _as_aqi(series[idx])

    for value in reversed(series):
        if value is not None:
            return _as_aqi(value)
    return 0


class WeatherClient:
    """Fetches current conditions and AQI, then normalizes them into `WeatherReading`."""

    def __init__(self, settings: Settings):
        self._settings = settings

    @property
    def _cfg(self) -> WeatherSettings:
        return self._settings.ingestion.weather

    def _fetch_current(self, coordinate: Coordinate) -> Any:
        params = {
            "latitude": coordinate.lat,
            "longitude": coordinate.lon,
            "current": ",".join(self._cfg.current_fields),
            "timezone": "auto",
        }
        with translate_http_errors(WEATHER_PROVIDER):
            return get_json(
                self._cfg.forecast_url,
                params=params,
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )

    def _fetch_air_quality(self, coordinate: Coordinate) -> Any:
        params = {
            "latitude": coordinate.lat,
            "longitude": coordinate.lon,
            "hourly": self._cfg.aqi_field,
            "timezone": "auto",
        }
        with translate_http_errors(AIR_QUALITY_PROVIDER):
            return get_json(
                self._cfg.air_quality_url,
                params=params,
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )

    def get_aqi(self, coordinate: Coordinate) -> int:
        """Return the AQI for `coordinate`, or 0 when the air-quality source is unusable."""
        try:
            payload = self._fetch_air_quality(coordinate)
            return extract_aqi(payload, field=self._cfg.aqi_field, selection=self._cfg.aqi_selection)
        except UpstreamError as e:
            logger.warning("AQI unavailable for lat=%s lon=%s, using 0: %s", coordinate.lat, coordinate.lon, e)
            return 0

    def get_reading(self, coordinate: Coordinate) -> WeatherReading:
        """Return current conditions for `coordinate`.

        Raises:
            UpstreamError: If the forecast call fails or its body has the wrong shape.
        """
        logger.info("Fetching weather for lat=%s lon=%s", coordinate.lat, coordinate.lon)
        reading = parse_current_conditions(self._fetch_current(coordinate))
        return reading.model_copy(update={"aqi": self.get_aqi(coordinate)})
