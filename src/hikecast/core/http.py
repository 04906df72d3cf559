"""
HTTP helpers.

This module centralizes the minimal HTTP client logic used by provider clients.

Design goals:
- Small surface area (GET JSON).
- Deterministic defaults (timeout + User-Agent).
- Raise on non-2xx so callers decide how to fail (fatal for weather/sun, degraded for AQI).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import httpx

from hikecast import __version__
from hikecast.core.errors import UpstreamDecodeError, UpstreamStatusError, UpstreamTransportError

DEFAULT_USER_AGENT = f"hikecast/{__version__} (+https://local)"


def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_seconds: float = 5,
) -> Any:
    """GET `url` and return the decoded JSON response.

    Raises:
        httpx.HTTPStatusError: On non-2xx status codes.
        httpx.HTTPError: On transport errors (including timeouts).
        ValueError: If the response body is not valid JSON.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update(headers)

    with httpx.Client(timeout=timeout_seconds) as client:
        resp = client.get(url, params=params, headers=request_headers)
        resp.raise_for_status()
        return resp.json()


@contextmanager
def translate_http_errors(provider: str) -> Iterator[None]:
    """Re-raise `get_json` failures as the matching `UpstreamError` subclass."""
    try:
        yield
    except httpx.TimeoutException as e:
        raise UpstreamTransportError(provider, f"timed out: {e}") from e
    except httpx.HTTPStatusError as e:
        raise UpstreamStatusError(provider, e.response.status_code, e.response.reason_phrase) from e
    except httpx.HTTPError as e:
        raise UpstreamTransportError(provider, f"fetch error: {e}") from e
    except ValueError as e:
        raise UpstreamDecodeError(provider, f"JSON decode error: {e}") from e
