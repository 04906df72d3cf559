"""
API routes.

Endpoints:
- GET  `/weather/{lat}/{lon}`: consolidated conditions, coordinates in the path.
- POST `/weather`: same, coordinates in a JSON body (`{"lat": "...", "lon": "..."}`).
- GET  `/health`: liveness probe (no network).
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, HTTPException

from hikecast import __version__
from hikecast.aggregator.aggregate import aggregate
from hikecast.config.settings import get_settings
from hikecast.core.errors import UpstreamError
from hikecast.domain.models import ConsolidatedResult, Coordinate
from hikecast.ingestion.sun_client import SunClient
from hikecast.ingestion.weather_client import WeatherClient

router = APIRouter()


@lru_cache
def _clients() -> tuple[WeatherClient, SunClient]:
    settings = get_settings()
    return WeatherClient(settings), SunClient(settings)


def _consolidated(coordinate: Coordinate) -> ConsolidatedResult:
    settings = get_settings()
    weather_client, sun_client = _clients()
    try:
        return aggregate(coordinate, settings=settings, weather_client=weather_client, sun_client=sun_client)
    except UpstreamError as e:
        raise HTTPException(
            status_code=502,
            detail={"code": "UPSTREAM_ERROR", "message": str(e)},
        ) from e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": str(e)},
        ) from e


@router.get("/weather/{lat}/{lon}", response_model=ConsolidatedResult)
def get_weather_by_params(lat: str, lon: str) -> ConsolidatedResult:
    """Return consolidated conditions for path coordinates."""
    return _consolidated(Coordinate(lat=lat, lon=lon))


@router.post("/weather", response_model=ConsolidatedResult)
def post_weather(coordinate: Coordinate) -> ConsolidatedResult:
    """Return consolidated conditions for a JSON body coordinate."""
    return _consolidated(coordinate)


@router.get("/health")
def get_health() -> dict:
    settings = get_settings()
    return {"status": "ok", "app": settings.app.name, "version": __version__}
