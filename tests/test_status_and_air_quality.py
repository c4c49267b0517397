"""Tests for the building status and air-quality views."""

from __future__ import annotations

import datetime as dt

import pytest

from building_telemetry.core.exceptions import MalformedUpstreamDataError
from building_telemetry.services.air_quality import aqi_status, build_air_quality_view
from building_telemetry.services.status_aggregator import (
    OperatingMode,
    build_offline_status_view,
    build_status_view,
    operating_mode,
)

FIXED_NOW = dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def test_status_view_metrics():
    """Test active systems and the derived estimates."""
    view = build_status_view(["Site A"], ["Client A", "Client B"], now=lambda: FIXED_NOW)

    assert view.connected
    assert view.metrics.active_systems == 3
    assert view.metrics.energy_efficiency == 78
    assert view.metrics.carbon_reduction == 81
    assert view.metrics.water_conservation == 1455
    assert view.metrics.automation_status == "ACTIVE"
    assert view.timestamp == FIXED_NOW.isoformat()


def test_status_efficiency_is_capped():
    view = build_status_view([f"s{i}" for i in range(10)], [f"c{i}" for i in range(20)])
    assert view.metrics.energy_efficiency == 95
    assert view.metrics.carbon_reduction == 45 + 30 * 12


def test_status_view_empty():
    view = build_status_view([], [])
    assert view.metrics.active_systems == 0
    assert view.metrics.energy_efficiency == 75


def test_status_as_dict():
    data = build_status_view(["Site A"], [], now=lambda: FIXED_NOW).as_dict()

    assert data["sites"] == {"names": ["Site A"], "count": 1}
    assert data["clients"] == {"names": [], "count": 0}
    assert data["metrics"]["activeSystems"] == 1
    assert data["portal"] == "IZITGreen"
    assert "error" not in data


def test_offline_status_view():
    data = build_offline_status_view("Token request failed: 401").as_dict()

    assert data["connected"] is False
    assert data["metrics"]["automationStatus"] == "OFFLINE"
    assert data["metrics"]["energyEfficiency"] == 0
    assert data["error"] == "Token request failed: 401"


@pytest.mark.parametrize(
    ("month", "mode"),
    [
        (1, OperatingMode.HEATING),
        (3, OperatingMode.HEATING),
        (4, OperatingMode.NORMAL),
        (5, OperatingMode.COOLING),
        (9, OperatingMode.COOLING),
        (10, OperatingMode.NORMAL),
        (11, OperatingMode.HEATING),
        (12, OperatingMode.HEATING),
    ],
)
def test_operating_mode(month, mode):
    assert operating_mode(month) is mode


@pytest.mark.parametrize(
    ("aqi", "status"),
    [(0, "Excellent"), (20, "Excellent"), (21, "Bon"), (60, "Moyen"), (80, "Médiocre"), (100, "Mauvais"), (101, "Très Mauvais")],
)
def test_aqi_status_bands(aqi, status):
    assert aqi_status(aqi).status == status


def test_air_quality_view():
    payload = {
        "current": {
            "european_aqi": 35,
            "pm2_5": 8.26,
            "pm10": 14.04,
            "nitrogen_dioxide": 21.16,
            "ozone": 60.0,
            "carbon_monoxide": 180.49,
            "sulphur_dioxide": None,
            "uv_index": 5.1,
        }
    }

    view = build_air_quality_view(payload, now=lambda: FIXED_NOW)

    assert view.aqi == 35
    assert view.status.status == "Bon"
    assert view.components == {
        "pm25": 8.3,
        "pm10": 14.0,
        "no2": 21.2,
        "o3": 60.0,
        "co": 180.5,
        "so2": None,
    }
    data = view.as_dict()
    assert data["uvIndex"] == 5.1
    assert data["status"]["status"] == "Bon"


def test_air_quality_missing_aqi():
    with pytest.raises(MalformedUpstreamDataError):
        build_air_quality_view({"current": {"pm10": 3}})
    with pytest.raises(MalformedUpstreamDataError):
        build_air_quality_view({})
