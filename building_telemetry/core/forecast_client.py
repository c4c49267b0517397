"""HTTP client for the public forecast and air-quality provider."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Dict

import aiohttp
from aiohttp.client import ClientTimeout

from ..const import (
    AIR_QUALITY_CURRENT_FIELDS,
    AIR_QUALITY_URL,
    FORECAST_CURRENT_FIELDS,
    FORECAST_DAILY_FIELDS,
    FORECAST_HOURLY_FIELDS,
    FORECAST_URL,
)
from .exceptions import ApiException, MalformedUpstreamDataError, UpstreamError

if TYPE_CHECKING:
    from ..config import Settings

_LOGGER = logging.getLogger(__name__)


class ForecastClient:
    """Unauthenticated client for Open-Meteo."""

    __slots__ = ("_session", "_settings")

    def __init__(self, session: aiohttp.ClientSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def _location_params(self) -> Dict[str, str]:
        return {
            "latitude": str(self._settings.latitude),
            "longitude": str(self._settings.longitude),
            "timezone": self._settings.timezone,
        }

    async def _get(self, url: str, params: Dict[str, str], timeout: float) -> Dict[str, Any]:
        try:
            async with self._session.get(url, params=params, timeout=ClientTimeout(total=timeout)) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    _LOGGER.error(f"Forecast provider request failed: {response.status}")
                    raise UpstreamError(response.status, body, url)
                try:
                    data = await response.json(content_type=None)
                except ValueError as err:
                    raise MalformedUpstreamDataError("Forecast provider returned invalid JSON") from err
        except (asyncio.TimeoutError, aiohttp.ClientError) as exc:
            _LOGGER.error(f"Forecast provider error: {type(exc).__name__}: {exc}")
            raise ApiException(f"Forecast provider error: {exc}") from exc

        if not isinstance(data, dict):
            raise MalformedUpstreamDataError("Forecast provider returned a non-object body")
        return data

    async def fetch_forecast(self) -> Dict[str, Any]:
        """Fetch current, hourly and daily weather for the configured location."""
        params = {
            **self._location_params(),
            "current": FORECAST_CURRENT_FIELDS,
            "hourly": FORECAST_HOURLY_FIELDS,
            "daily": FORECAST_DAILY_FIELDS,
        }
        return await self._get(FORECAST_URL, params, self._settings.weather_timeout)

    async def fetch_air_quality(self) -> Dict[str, Any]:
        """Fetch current air-quality readings for the configured location."""
        params = {**self._location_params(), "current": AIR_QUALITY_CURRENT_FIELDS}
        return await self._get(AIR_QUALITY_URL, params, self._settings.air_quality_timeout)
