"""
HikeCast CLI entrypoint.

This CLI is intended for quick local checks without running the API server.
It delegates all work to `hikecast.aggregator.aggregate.aggregate`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from hikecast.aggregator.aggregate import aggregate
from hikecast.config.settings import get_settings
from hikecast.core.errors import UpstreamError
from hikecast.core.logging import configure_logging
from hikecast.domain.models import Coordinate
from hikecast.features.hiking import explain_hiking_index


def _cmd_conditions(args: argparse.Namespace) -> int:
    """Handle the `conditions` subcommand."""
    settings = get_settings()
    coordinate = Coordinate(lat=str(args.lat), lon=str(args.lon))

    try:
        result = aggregate(coordinate, settings=settings)
    except UpstreamError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    w, sun, moon, idx = result.weather, result.sun, result.moon, result.indices
    print(f"Conditions at {coordinate.lat}, {coordinate.lon} ({settings.app.timezone})")
    print(
        f"  weather: {w.temperature:.1f}°C, precipitation {w.precipitation:.1f} mm, "
        f"cloud {w.cloud_cover}%, UV {w.uv_index:.1f}, AQI {w.aqi}"
    )
    print(f"  sun: sunrise {sun.sunrise}, sunset {sun.sunset}, golden hour ends {sun.golden_hour_end}")
    print(f"  moon: {moon.phase_name} ({moon.illumination:.0%} illuminated)")
    print(f"  hiking: {idx.hiking_index:.1f}/10, {idx.hiking_recommendation}")
    for penalty in explain_hiking_index(w, settings=settings):
        print(f"    -{penalty.points} {penalty.reason}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the HikeCast CLI."""
    parser = argparse.ArgumentParser(prog="hikecast")
    sub = parser.add_subparsers(dest="command", required=True)

    cond = sub.add_parser("conditions", help="Fetch consolidated weather/sun/moon/hiking conditions.")
    # Kept as strings: coordinates are passed to the providers verbatim.
    cond.add_argument("--lat", required=True, type=str)
    cond.add_argument("--lon", required=True, type=str)
    cond.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    cond.set_defaults(func=_cmd_conditions)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m hikecast.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
