"""HikeCast: consolidated weather, sun, moon and hiking conditions for a coordinate."""

__version__ = "0.1.0"
