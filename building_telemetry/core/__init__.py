"""Core clients for building telemetry.

This package contains the portal and forecast HTTP clients, the token cache,
sample parsing and the exception hierarchy.
"""

from .api_client import AutomationClient
from .exceptions import (
    ApiException,
    AuthError,
    ConfigError,
    MalformedUpstreamDataError,
    TelemetryException,
    UpstreamError,
)
from .forecast_client import ForecastClient
from .retry import call_with_backoff
from .sample_parser import parse_sample_value, parse_trend_samples
from .token_cache import TokenCache

__all__ = [
    "ApiException",
    "AuthError",
    "AutomationClient",
    "ConfigError",
    "ForecastClient",
    "MalformedUpstreamDataError",
    "TelemetryException",
    "TokenCache",
    "UpstreamError",
    "call_with_backoff",
    "parse_sample_value",
    "parse_trend_samples",
]
