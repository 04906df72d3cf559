from __future__ import annotations

import pytest

from hikecast.config.settings import get_settings
from hikecast.domain.models import Coordinate, SunTimes, WeatherReading


@pytest.fixture()
def coordinate() -> Coordinate:
    return Coordinate(lat="-6.2088", lon="106.8456")


@pytest.fixture()
def mild_reading() -> WeatherReading:
    return WeatherReading(temperature=24.0, precipitation=0.0, cloud_cover=30, uv_index=5.0, aqi=40)


@pytest.fixture()
def sun_times() -> SunTimes:
    return SunTimes(sunrise="05:30", sunset="17:45", golden_hour_end="06:30")


@pytest.fixture()
def fresh_settings():
    """Clear the cached settings around a test that changes env/config."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()
