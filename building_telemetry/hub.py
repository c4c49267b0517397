"""Telemetry hub: the surface consumed by the presentation layer."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import aiohttp

from .config import Settings
from .const import DEFAULT_VALUE_PATH, PRESSURE_RFTP_SENSORS, RFTP_SENSORS, ROOFTOP_UNITS, TEMPERATURE_SENSORS
from .core.api_client import AutomationClient
from .core.exceptions import ApiException, MalformedUpstreamDataError, TelemetryException
from .core.forecast_client import ForecastClient
from .models import (
    AirQualityView,
    Credential,
    SensorDescriptor,
    SensorResult,
    StatusView,
    ValueReading,
    WeatherView,
)
from .services.air_quality import build_air_quality_view
from .services.batch_fetcher import SensorBatchFetcher
from .services.status_aggregator import build_offline_status_view, build_status_view
from .services.weather_aggregator import build_weather_view

_LOGGER = logging.getLogger(__name__)

SENSOR_GROUPS: Dict[str, Tuple[SensorDescriptor, ...]] = {
    "temperature": TEMPERATURE_SENSORS,
    "pressure_rftp": PRESSURE_RFTP_SENSORS,
    "rooftop_units": ROOFTOP_UNITS,
    "rftp": RFTP_SENSORS,
}


class TelemetryHub:
    """Wires the portal and forecast clients for one process.

    The hub owns the single portal client, and with it the single cached
    credential. Use it as an async context manager, or pass in a session you
    manage yourself.
    """

    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._client: Optional[AutomationClient] = None
        self._forecast: Optional[ForecastClient] = None
        if session is not None:
            self._bind(session)

    def _bind(self, session: aiohttp.ClientSession) -> None:
        self._session = session
        self._client = AutomationClient(session, self._settings)
        self._forecast = ForecastClient(session, self._settings)

    async def __aenter__(self) -> "TelemetryHub":
        if self._session is None:
            self._bind(aiohttp.ClientSession())
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._client = None
            self._forecast = None

    @property
    def client(self) -> AutomationClient:
        if self._client is None:
            raise RuntimeError("TelemetryHub is not started; use 'async with TelemetryHub(...)'")
        return self._client

    @property
    def forecast(self) -> ForecastClient:
        if self._forecast is None:
            raise RuntimeError("TelemetryHub is not started; use 'async with TelemetryHub(...)'")
        return self._forecast

    # ---------------------------
    # Portal operations
    # ---------------------------

    async def get_token(self) -> Credential:
        return await self.client.get_token()

    async def list_sites(self) -> List[str]:
        return await self.client.list_sites()

    async def list_clients(self) -> List[str]:
        return await self.client.list_clients()

    async def read_value(self, value_path: str = DEFAULT_VALUE_PATH) -> ValueReading:
        return await self.client.read_value(value_path)

    async def fetch_sensor_batch(self, descriptors: Iterable[SensorDescriptor]) -> Tuple[SensorResult, ...]:
        """Fetch sensors concurrently; failures are captured per sensor."""
        return await SensorBatchFetcher(self.client).fetch_all(descriptors)

    async def fetch_sensor_group(self, group: str) -> Tuple[SensorResult, ...]:
        try:
            descriptors = SENSOR_GROUPS[group]
        except KeyError:
            raise ValueError(f"Unknown sensor group: {group}") from None
        return await self.fetch_sensor_batch(descriptors)

    async def fetch_status_view(self) -> StatusView:
        """Building status, degraded to the offline view on portal errors."""
        try:
            sites, clients = await asyncio.gather(self.client.list_sites(), self.client.list_clients())
        except (ApiException, MalformedUpstreamDataError) as err:
            _LOGGER.error(f"Error fetching portal status: {err}")
            return build_offline_status_view(str(err))
        _LOGGER.info(
            f"Portal status: {len(sites)} sites, {len(clients)} clients, "
            f"{len(sites) + len(clients)} total systems"
        )
        return build_status_view(sites, clients)

    # ---------------------------
    # Forecast operations
    # ---------------------------

    async def fetch_weather_view(self) -> WeatherView:
        payload = await self.forecast.fetch_forecast()
        return build_weather_view(payload, self._settings.energy_model)

    async def fetch_air_quality_view(self) -> AirQualityView:
        payload = await self.forecast.fetch_air_quality()
        return build_air_quality_view(payload)

    async def refresh_dashboard(self, groups: Iterable[str] = tuple(SENSOR_GROUPS)) -> Dict[str, Any]:
        """Fetch everything at once.

        Each part is independent. A part that fails is reported under
        ``errors`` and the rest of the dashboard is still returned.
        """
        dashboard: Dict[str, Any] = {"errors": {}}
        requested = tuple(groups)
        groups = tuple(group for group in requested if group in SENSOR_GROUPS)
        for group in requested:
            if group not in SENSOR_GROUPS:
                _LOGGER.warning(f"Dashboard requested unknown sensor group '{group}'")
                dashboard["errors"][group] = f"Unknown sensor group: {group}"
                dashboard[group] = None

        names = ("weather", "air_quality", "status", *groups)
        outcomes = await asyncio.gather(
            self.fetch_weather_view(),
            self.fetch_air_quality_view(),
            self.fetch_status_view(),
            *(self.fetch_sensor_group(group) for group in groups),
            return_exceptions=True,
        )

        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, TelemetryException):
                _LOGGER.warning(f"Dashboard part '{name}' failed: {outcome}")
                dashboard["errors"][name] = str(outcome)
                dashboard[name] = None
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                dashboard[name] = outcome
        dashboard["timestamp"] = dt.datetime.now(dt.timezone.utc).isoformat()
        return dashboard

    def diagnostics(self) -> Dict[str, Any]:
        """Client state without secrets."""
        return {
            "portal": self.client.request_summary(),
            "weather": {
                "latitude": self._settings.latitude,
                "longitude": self._settings.longitude,
                "timezone": self._settings.timezone,
            },
        }
