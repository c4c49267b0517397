"""Custom exceptions for the building telemetry package."""

from __future__ import annotations

from typing import Optional


class TelemetryException(Exception):
    """Base exception for building telemetry."""

    pass


class ConfigError(TelemetryException):
    """Exception for invalid configuration."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class ApiException(TelemetryException):
    """Exception for API-related errors."""

    pass


class AuthError(ApiException):
    """Authentication call failed or returned no token."""

    pass


class UpstreamError(ApiException):
    """Non-2xx response from an authenticated or public API call."""

    def __init__(self, status: int, body: str, url: Optional[str] = None) -> None:
        super().__init__(f"Upstream request failed: {status}")
        self.status = status
        self.body = body
        self.url = url

    @property
    def status_code(self) -> int:
        return self.status

    @property
    def is_auth_failure(self) -> bool:
        return self.status in (401, 403)


class MalformedUpstreamDataError(TelemetryException):
    """Response shape does not match the expected contract."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
