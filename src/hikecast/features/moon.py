# src/hikecast/features/moon.py
"""
Moon phase (global, location-independent).

The phase is the position inside the current synodic month, counted from a known
reference new moon. It depends only on the instant, so every coordinate gets the
same answer; observer location and local time zone are deliberately ignored.
"""

from __future__ import annotations

from datetime import datetime

from hikecast.config.settings import MoonSettings, Settings, get_settings
from hikecast.core.time import ensure_tz, utc_now
from hikecast.domain.models import MoonPhase
from hikecast.scoring.bounds import clamp01

SECONDS_PER_DAY = 86_400.0

# Upper bounds (exclusive) into the [0, 1) cycle; anything past the last one is "Waning Crescent".
PHASE_BANDS: tuple[tuple[float, str], ...] = (
    (0.03, "New Moon"),
    (0.25, "Waxing Crescent"),
    (0.27, "First Quarter"),
    (0.50, "Waxing Gibbous"),
    (0.53, "Full Moon"),
    (0.75, "Waning Gibbous"),
    (0.77, "Last Quarter"),
    (0.97, "Waning Crescent"),
)
NEW_MOON = "New Moon"
WANING_CRESCENT = "Waning Crescent"


def lunar_phase_fraction(now: datetime, moon: MoonSettings) -> float:
    """Return the position in the lunar cycle: 0 = new moon, 0.5 = full moon."""
    elapsed = ensure_tz(now) - moon.reference_new_moon
    days = elapsed.total_seconds() / SECONDS_PER_DAY
    # Python's modulo is floored, so instants before the reference still land in [0, synodic).
    return (days % moon.synodic_month_days) / moon.synodic_month_days


def classify_phase(phase: float) -> str:
    """Map a cycle fraction in [0, 1) to one of the eight named phases."""
    if phase > 0.97:
        return NEW_MOON
    for upper, name in PHASE_BANDS:
        if phase < upper:
            return name
    return WANING_CRESCENT


def illumination_from_phase(phase: float) -> float:
    """Triangular wave: 0.0 at new moon, 1.0 at full moon, rounded to 2 decimals."""
    folded = 1 - phase if phase > 0.5 else phase
    return round(clamp01(folded * 2), 2)


def calculate_moon_phase(now: datetime | None = None, *, settings: Settings | None = None) -> MoonPhase:
    """Return the moon phase for `now` (current UTC time when omitted)."""
    settings = settings or get_settings()
    instant = ensure_tz(now) if now is not None else utc_now()
    phase = lunar_phase_fraction(instant, settings.astronomy.moon)
    return MoonPhase(phase_name=classify_phase(phase), illumination=illumination_from_phase(phase))
