"""Exception hierarchy for upstream provider failures."""

from __future__ import annotations


class HikeCastError(Exception):
    """Base exception for all hikecast errors."""


class UpstreamError(HikeCastError):
    """A provider (weather, air quality, sun) could not deliver a usable result."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class UpstreamTransportError(UpstreamError):
    """The provider could not be reached (connection failure or timeout)."""


class UpstreamStatusError(UpstreamError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, reason: str = ""):
        self.status_code = status_code
        message = f"bad response: {status_code} {reason}".rstrip()
        super().__init__(provider, message)


class UpstreamDecodeError(UpstreamError):
    """The response body could not be parsed into the expected shape."""


class TimeParseError(UpstreamError):
    """A timestamp field from the provider could not be parsed."""

    def __init__(self, provider: str, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(provider, f"invalid time format for {field}: {value!r}")
