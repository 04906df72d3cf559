from datetime import datetime, timedelta, timezone

import pytest

from hikecast.config.settings import get_settings
from hikecast.features.moon import (
    calculate_moon_phase,
    classify_phase,
    illumination_from_phase,
    lunar_phase_fraction,
)

PHASE_NAMES = {
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
}

REFERENCE = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)
SYNODIC = timedelta(days=29.53058867)


def test_reference_instant_is_new_moon():
    moon = calculate_moon_phase(REFERENCE)
    assert moon.phase_name == "New Moon"
    assert moon.illumination == pytest.approx(0.0)


def test_naive_datetimes_are_treated_as_utc():
    assert calculate_moon_phase(REFERENCE.replace(tzinfo=None)) == calculate_moon_phase(REFERENCE)


def test_near_full_moon():
    moon = calculate_moon_phase(REFERENCE + SYNODIC * 0.51)
    assert moon.phase_name == "Full Moon"
    assert moon.illumination == pytest.approx(0.98)


def test_instants_before_reference_stay_in_cycle():
    phase = lunar_phase_fraction(datetime(1999, 12, 1, tzinfo=timezone.utc), get_settings().astronomy.moon)
    assert 0.0 <= phase < 1.0


@pytest.mark.parametrize(
    "instant",
    [
        datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc),
        datetime(2026, 10, 19, 3, 17, tzinfo=timezone.utc),
        datetime(2031, 7, 1, 21, 45, tzinfo=timezone.utc),
    ],
)
def test_illumination_is_bounded_and_periodic(instant):
    first = calculate_moon_phase(instant)
    later = calculate_moon_phase(instant + SYNODIC)
    assert 0.0 <= first.illumination <= 1.0
    assert first.illumination == later.illumination
    assert first.phase_name == later.phase_name


@pytest.mark.parametrize(
    ("phase", "expected"),
    [
        (0.0, "New Moon"),
        (0.029, "New Moon"),
        (0.03, "Waxing Crescent"),
        (0.25, "First Quarter"),
        (0.27, "Waxing Gibbous"),
        (0.5, "Full Moon"),
        (0.53, "Waning Gibbous"),
        (0.75, "Last Quarter"),
        (0.77, "Waning Crescent"),
        (0.97, "Waning Crescent"),
        (0.9701, "New Moon"),
    ],
)
def test_band_edges(phase, expected):
    assert classify_phase(phase) == expected


def test_classification_covers_whole_cycle():
    names = {classify_phase(i / 10_000) for i in range(10_000)}
    assert names == PHASE_NAMES


def test_illumination_is_a_triangle_wave():
    assert illumination_from_phase(0.0) == 0.0
    assert illumination_from_phase(0.25) == 0.5
    assert illumination_from_phase(0.5) == 1.0
    assert illumination_from_phase(0.75) == 0.5
    assert all(0.0 <= illumination_from_phase(i / 1000) <= 1.0 for i in range(1000))
