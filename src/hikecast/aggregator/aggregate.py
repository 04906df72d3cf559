# src/hikecast/aggregator/aggregate.py
"""
Aggregator orchestration.

High-level flow:
1) Submit the weather and sun provider calls to a two-worker pool.
2) Wait for BOTH to finish; a failure on one side never cancels the other.
3) Fail as a whole if either side failed (weather error wins when both fail).
4) Derive moon phase + hiking index locally and assemble a `ConsolidatedResult`.

Clients are injectable so API/CLI/tests can swap in stubs without touching the network.
"""

from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Protocol, TypeVar

from hikecast.config.settings import Settings, get_settings
from hikecast.core.errors import UpstreamError
from hikecast.domain.models import Coordinate, ConsolidatedResult, SunTimes, WeatherReading
from hikecast.features.hiking import calculate_hiking_index
from hikecast.features.moon import calculate_moon_phase
from hikecast.ingestion.sun_client import SUN_PROVIDER, SunClient
from hikecast.ingestion.weather_client import WEATHER_PROVIDER, WeatherClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WeatherProvider(Protocol):
    def get_reading(self, coordinate: Coordinate) -> WeatherReading: ...


class SunProvider(Protocol):
    def get_sun_times(self, coordinate: Coordinate) -> SunTimes: ...


def _result_or_raise(future: Future[T], provider: str) -> T:
    """Unwrap a finished future, normalizing unexpected failures into `UpstreamError`."""
    exc = future.exception()
    if exc is None:
        return future.result()
    if isinstance(exc, UpstreamError):
        raise exc
    raise UpstreamError(provider, f"unexpected error: {exc}") from exc


def aggregate(
    coordinate: Coordinate,
    *,
    settings: Settings | None = None,
    weather_client: WeatherProvider | None = None,
    sun_client: SunProvider | None = None,
    now: datetime | None = None,
) -> ConsolidatedResult:
    """Return the consolidated conditions for `coordinate`.

    Raises:
        UpstreamError: If either provider failed; never returns a partial result.
    """
    settings = settings or get_settings()
    weather_client = weather_client or WeatherClient(settings)
    sun_client = sun_client or SunClient(settings)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="hikecast-upstream") as pool:
        weather_future = pool.submit(weather_client.get_reading, coordinate)
        sun_future = pool.submit(sun_client.get_sun_times, coordinate)
        wait([weather_future, sun_future], return_when=ALL_COMPLETED)

    try:
        # Order fixes precedence: the weather error is reported when both fail.
        weather = _result_or_raise(weather_future, WEATHER_PROVIDER)
        sun = _result_or_raise(sun_future, SUN_PROVIDER)
    except UpstreamError as e:
        logger.warning("Aggregation failed for lat=%s lon=%s (%s): %s", coordinate.lat, coordinate.lon, e.provider, e)
        raise

    return ConsolidatedResult(
        weather=weather,
        sun=sun,
        moon=calculate_moon_phase(now, settings=settings),
        indices=calculate_hiking_index(weather, settings=settings),
    )
