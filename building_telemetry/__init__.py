"""Building telemetry aggregation.

Combines building-automation portal trend data with forecast weather and
derives estimated energy consumption.
"""

from .config import Settings, load_settings
from .core.exceptions import (
    ApiException,
    AuthError,
    ConfigError,
    MalformedUpstreamDataError,
    TelemetryException,
    UpstreamError,
)
from .hub import SENSOR_GROUPS, TelemetryHub
from .services.energy import estimate
from .services.status_aggregator import build_status_view
from .services.weather_aggregator import build_weather_view

__version__ = "1.0.0"

__all__ = [
    "ApiException",
    "AuthError",
    "ConfigError",
    "MalformedUpstreamDataError",
    "SENSOR_GROUPS",
    "Settings",
    "TelemetryException",
    "TelemetryHub",
    "UpstreamError",
    "build_status_view",
    "build_weather_view",
    "estimate",
    "load_settings",
]
