"""
Sun times ingestion client (sunrise-sunset.org).

The upstream returns absolute UTC timestamps (`formatted=0`). This client converts them
into the configured target zone, formats them as `HH:MM` and derives the end of the
morning golden hour locally (sunrise + `golden_hour_minutes`).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from hikecast.config.settings import Settings
from hikecast.core.errors import TimeParseError, UpstreamDecodeError
from hikecast.core.http import get_json, translate_http_errors
from hikecast.core.time import format_hhmm, parse_datetime, to_local
from hikecast.domain.models import Coordinate, SunTimes

logger = logging.getLogger(__name__)

SUN_PROVIDER = "sun"


def _parse_timestamp(results: dict[str, Any], field: str) -> datetime:
    raw = results.get(field)
    try:
        return parse_datetime(raw, "UTC")
    except ValueError as e:
        raise TimeParseError(SUN_PROVIDER, field, raw) from e


def parse_sun_times(payload: Any, *, timezone: str, golden_hour_minutes: int = 60) -> SunTimes:
    """Turn a sunrise-sunset.org response into local `SunTimes`.

    Raises:
        UpstreamDecodeError: If the response has no `results` object.
        TimeParseError: If `sunrise` or `sunset` is missing or not ISO-8601.
    """
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, dict):
        raise UpstreamDecodeError(SUN_PROVIDER, "response has no 'results' object")

    sunrise = to_local(_parse_timestamp(results, "sunrise"), timezone)
    sunset = to_local(_parse_timestamp(results, "sunset"), timezone)
    golden_hour_end = sunrise + timedelta(minutes=golden_hour_minutes)

    return SunTimes(
        sunrise=format_hhmm(sunrise),
        sunset=format_hhmm(sunset),
        golden_hour_end=format_hhmm(golden_hour_end),
    )


class SunClient:
    """Fetches sunrise/sunset for a coordinate and formats them in the target zone."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _fetch(self, coordinate: Coordinate) -> Any:
        params = {"lat": coordinate.lat, "lng": coordinate.lon, "formatted": 0}
        with translate_http_errors(SUN_PROVIDER):
            return get_json(
                self._settings.ingestion.sun.base_url,
                params=params,
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )

    def get_sun_times(self, coordinate: Coordinate) -> SunTimes:
        """Return local sun times for `coordinate`.

        Raises:
            UpstreamError: On transport, status, decode or timestamp failures.
        """
        logger.info("Fetching sun times for lat=%s lon=%s", coordinate.lat, coordinate.lon)
        return parse_sun_times(
            self._fetch(coordinate),
            timezone=self._settings.app.timezone,
            golden_hour_minutes=self._settings.ingestion.sun.golden_hour_minutes,
        )
