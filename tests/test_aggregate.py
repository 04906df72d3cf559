import threading
import time
from datetime import datetime, timezone

import pytest

from hikecast.aggregator.aggregate import aggregate
from hikecast.core.errors import TimeParseError, UpstreamError, UpstreamStatusError, UpstreamTransportError
from hikecast.domain.models import WeatherReading

NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)


class StubWeatherClient:
    def __init__(self, reading=None, error=None, delay=0.0):
        self.reading = reading
        self.error = error
        self.delay = delay
        self.finished = threading.Event()

    def get_reading(self, coordinate):
        try:
            time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.reading
        finally:
            self.finished.set()


class StubSunClient:
    def __init__(self, sun=None, error=None, delay=0.0):
        self.sun = sun
        self.error = error
        self.delay = delay
        self.finished = threading.Event()

    def get_sun_times(self, coordinate):
        try:
            time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.sun
        finally:
            self.finished.set()


def test_success_assembles_all_sections(coordinate, mild_reading, sun_times):
    result = aggregate(
        coordinate,
        weather_client=StubWeatherClient(reading=mild_reading),
        sun_client=StubSunClient(sun=sun_times),
        now=NEW_MOON,
    )

    assert result.weather == mild_reading
    assert result.sun == sun_times
    assert result.moon.phase_name == "New Moon"
    assert result.moon.illumination == 0.0
    assert result.indices.hiking_index == 10.0
    assert result.indices.hiking_recommendation == "excellent"
    assert set(result.model_dump()) == {"weather", "sun", "moon", "indices"}


def test_indices_follow_the_weather_reading(coordinate, sun_times):
    hot = WeatherReading(temperature=35, precipitation=0, cloud_cover=20, uv_index=5, aqi=50)
    result = aggregate(
        coordinate,
        weather_client=StubWeatherClient(reading=hot),
        sun_client=StubSunClient(sun=sun_times),
        now=NEW_MOON,
    )
    assert result.indices.hiking_index == 7.0
    assert result.indices.hiking_recommendation == "fair, watch conditions"


def test_weather_failure_fails_the_whole_aggregation(coordinate, sun_times):
    error = UpstreamTransportError("weather", "fetch error: connection refused")
    sun_client = StubSunClient(sun=sun_times)

    with pytest.raises(UpstreamTransportError) as exc_info:
        aggregate(coordinate, weather_client=StubWeatherClient(error=error), sun_client=sun_client)

    assert exc_info.value is error
    assert sun_client.finished.is_set()


def test_sun_failure_fails_the_whole_aggregation(coordinate, mild_reading):
    error = TimeParseError("sun", "sunrise", "garbage")

    with pytest.raises(TimeParseError):
        aggregate(
            coordinate,
            weather_client=StubWeatherClient(reading=mild_reading),
            sun_client=StubSunClient(error=error),
        )


def test_weather_error_wins_when_both_fail(coordinate):
    weather_error = UpstreamStatusError("weather", 503, "Service Unavailable")
    sun_error = UpstreamTransportError("sun", "timed out")

    with pytest.raises(UpstreamError) as exc_info:
        aggregate(
            coordinate,
            weather_client=StubWeatherClient(error=weather_error, delay=0.05),
            sun_client=StubSunClient(error=sun_error),
        )
    assert exc_info.value is weather_error


def test_failure_does_not_cancel_the_slower_call(coordinate):
    weather_client = StubWeatherClient(error=UpstreamTransportError("weather", "refused"))
    sun_client = StubSunClient(error=None, sun=None, delay=0.2)

    with pytest.raises(UpstreamTransportError):
        aggregate(coordinate, weather_client=weather_client, sun_client=sun_client)

    assert weather_client.finished.is_set()
    assert sun_client.finished.is_set()


def test_provider_calls_run_concurrently(coordinate, mild_reading, sun_times):
    # Each stub blocks until the other has started; sequential calls would break the barrier.
    barrier = threading.Barrier(2, timeout=5)

    class BarrierWeather(StubWeatherClient):
        def get_reading(self, coordinate):
            barrier.wait()
            return super().get_reading(coordinate)

    class BarrierSun(StubSunClient):
        def get_sun_times(self, coordinate):
            barrier.wait()
            return super().get_sun_times(coordinate)

    result = aggregate(
        coordinate,
        weather_client=BarrierWeather(reading=mild_reading),
        sun_client=BarrierSun(sun=sun_times),
        now=NEW_MOON,
    )
    assert result.sun == sun_times


def test_unexpected_client_errors_are_reported_as_upstream_errors(coordinate, sun_times):
    with pytest.raises(UpstreamError) as exc_info:
        aggregate(
            coordinate,
            weather_client=StubWeatherClient(error=RuntimeError("boom")),
            sun_client=StubSunClient(sun=sun_times),
        )
    assert exc_info.value.provider == "weather"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
