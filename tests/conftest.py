"""Pytest configuration and fixtures for building telemetry tests."""

from __future__ import annotations

import asyncio
import datetime as dt
from typing import Any, Dict, List, Set
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web
from aiohttp.test_utils import TestServer

from building_telemetry.config import Settings
from building_telemetry.models import Sample, SampleQuality, SensorDescriptor


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePortal:
    """In-process stand-in for the building-automation portal."""

    def __init__(self) -> None:
        self.token_calls = 0
        self.token_forms: List[Dict[str, str]] = []
        self.token_status = 200
        self.token_body: Any = {"access_token": "token-1"}
        self.requests: List[web.Request] = []
        self.trend_ids: List[str] = []
        self.order_by: List[str] = []
        self.raw_queries: List[str] = []
        self.trends: Dict[str, Any] = {}
        self.trend_status: Dict[str, int] = {}
        self.listing: Dict[str, Any] = {}
        self.listing_status = 200
        self.listing_delay: Dict[str, float] = {}
        self.rejected_tokens: Set[str] = set()
        self.value_body: Any = {"Value": 42.5}

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/GetToken", self._token)
        app.router.add_get("/Containers/{container}/Children", self._children)
        app.router.add_get("/Values/{value}/Value", self._value)
        app.router.add_get("/TrendSamples", self._trend)
        return app

    async def _token(self, request: web.Request) -> web.Response:
        self.token_calls += 1
        self.token_forms.append(dict(await request.post()))
        if self.token_status != 200:
            return web.Response(status=self.token_status, text="invalid_grant")
        body = self.token_body
        if isinstance(body, dict) and body.get("access_token"):
            body = {"access_token": f"token-{self.token_calls}"}
        return web.json_response(body)

    async def _children(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        raw_path = request.raw_path.split("/")[2]
        delay = self.listing_delay.get(raw_path)
        if delay:
            await asyncio.sleep(delay)
        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token in self.rejected_tokens:
            return web.Response(status=401, text="token rejected")
        if self.listing_status != 200:
            return web.Response(status=self.listing_status, text="listing failed")
        return web.json_response(self.listing.get(raw_path, []))

    async def _value(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        return web.json_response(self.value_body)

    async def _trend(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        trend_id = request.query["trendId"]
        self.trend_ids.append(trend_id)
        self.order_by.append(request.query.get("orderBy", ""))
        self.raw_queries.append(request.rel_url.raw_query_string)
        status = self.trend_status.get(trend_id, 200)
        if status != 200:
            return web.Response(status=status, text=f"no trend {trend_id}")
        return web.json_response(self.trends.get(trend_id, []))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def portal() -> FakePortal:
    return FakePortal()


@pytest_asyncio.fixture
async def portal_server(portal: FakePortal):
    server = TestServer(portal.app())
    await server.start_server()
    yield server
    await server.close()


@pytest_asyncio.fixture
async def session():
    async with ClientSession() as client_session:
        yield client_session


@pytest.fixture
def settings() -> Settings:
    return Settings(username="operator", password="secret", api_base="http://portal.test")


@pytest.fixture
def portal_settings(portal_server: TestServer) -> Settings:
    base = str(portal_server.make_url("")).rstrip("/")
    return Settings(username="operator", password="secret", api_base=base, request_timeout=5)


def make_sample(minute: int, value: Any, quality: SampleQuality = SampleQuality.GOOD) -> Sample:
    return Sample(
        sample_date=dt.datetime(2024, 1, 15, 10, minute, tzinfo=dt.timezone.utc),
        value=value,
        quality=quality,
    )


def raw_sample(minute: int, value: Any, quality: str = "Good") -> Dict[str, Any]:
    return {"SampleDate": f"2024-01-15T10:{minute:02d}:00Z", "Value": value, "Quality": quality}


@pytest.fixture
def descriptors() -> List[SensorDescriptor]:
    return [
        SensorDescriptor("S1", "Sensor 1", "01/Site/a/Temp 1.trend log"),
        SensorDescriptor("S2", "Sensor 2", "01/Site/a/Temp 2.trend log"),
        SensorDescriptor("S3", "Sensor 3", "01/Site/extended trend log/Extended Trend Log_rftp3"),
    ]


@pytest.fixture
def mock_api_client():
    """Mock portal client."""
    client = MagicMock()
    client.read_trend_samples = AsyncMock(return_value=[])
    client.list_sites = AsyncMock(return_value=["Site A"])
    client.list_clients = AsyncMock(return_value=["Client A", "Client B"])
    return client


@pytest.fixture
def forecast_payload() -> Dict[str, Any]:
    """Forecast payload with 48 hourly and 7 daily entries."""
    hours = 48
    days = 7
    hourly = {
        "time": [f"2024-06-01T{h % 24:02d}:00" for h in range(hours)],
        "temperature_2m": [20.0] * hours,
        "precipitation_probability": [10] * hours,
        "precipitation": [0.0] * hours,
        "weather_code": [1] * hours,
        "cloud_cover": [0] * hours,
        "visibility": [24000] * hours,
        "uv_index": [3.5] * hours,
        "wind_speed_10m": [5.0] * hours,
        "wind_direction_10m": [180] * hours,
        "relative_humidity_2m": [50] * hours,
        "dew_point_2m": [9.0] * hours,
        "shortwave_radiation": [200.0] * hours,
        "direct_radiation": [150.0] * hours,
    }
    hourly["temperature_2m"][0] = 30.0
    hourly["relative_humidity_2m"][0] = 80
    hourly["cloud_cover"][0] = 100
    hourly["wind_speed_10m"][0] = 20.0
    daily = {
        "time": [f"2024-06-0{d + 1}" for d in range(days)],
        "weather_code": [3] * days,
        "temperature_2m_max": [25.0] * days,
        "temperature_2m_min": [14.0] * days,
        "precipitation_sum": [0.0] * days,
        "precipitation_probability_max": [20] * days,
        "wind_speed_10m_max": [18.0] * days,
        "wind_gusts_10m_max": [30.0] * days,
        "uv_index_max": [6.0] * days,
        "sunrise": [f"2024-06-0{d + 1}T05:48" for d in range(days)],
        "sunset": [f"2024-06-0{d + 1}T21:50" for d in range(days)],
        "daylight_duration": [57600.0] * days,
        "sunshine_duration": [40000.0] * days,
    }
    return {
        "current": {
            "temperature_2m": 20.0,
            "relative_humidity_2m": 50,
            "apparent_temperature": 19.5,
            "precipitation": 0.0,
            "weather_code": 2,
            "wind_speed_10m": 0.0,
            "wind_direction_10m": 90,
            "pressure_msl": 1015.2,
            "cloud_cover": 0,
            "visibility": 24000,
            "uv_index": 4.0,
            "is_day": 1,
        },
        "hourly": hourly,
        "daily": daily,
    }
