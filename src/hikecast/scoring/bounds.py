"""
Shared scoring utilities.

Small helpers used by the derived calculators:
- `clamp`: keep a value inside a closed range
- `clamp01`: keep fractions (moon illumination) within 0..1
"""

from __future__ import annotations


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp a number into the [lo, hi] range."""
    return max(lo, min(hi, x))


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    return clamp(float(x), 0.0, 1.0)
