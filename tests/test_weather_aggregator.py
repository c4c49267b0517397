"""Tests for the weather view."""

from __future__ import annotations

import copy

import pytest

from building_telemetry.const import UNKNOWN_CONDITION
from building_telemetry.core.exceptions import MalformedUpstreamDataError
from building_telemetry.models import EnergyModel
from building_telemetry.services.weather_aggregator import build_weather_view, describe_weather_code


def test_current_record_and_energy(forecast_payload):
    """Test the current reading is normalised and estimated."""
    view = build_weather_view(forecast_payload)

    assert view.current["temperature"] == 20.0
    assert view.current["feels_like"] == 19.5
    assert view.current["pressure"] == 1015.2
    assert view.current["weather_code"] == 2
    assert view.current["weather_description"] == "Partly cloudy"
    assert view.current["weather_icon"] == "⛅"
    assert view.current_energy.total == pytest.approx(50.0)


def test_hourly_truncated_to_24_and_estimated(forecast_payload):
    """Test only the first 24 hours are kept, each with its own estimate."""
    view = build_weather_view(forecast_payload)

    assert len(view.forecast_24h) == 24
    assert all(len(values) == 24 for values in view.hourly.values())
    assert view.hourly["solar_radiation"][0] == 200.0
    assert view.forecast_24h[0]["time"] == "2024-06-01T00:00"
    first = view.forecast_24h[0]["consumption"]
    assert (first.hvac, first.lighting, first.total) == (82.0, 25.0, 107.0)
    assert view.forecast_24h[1]["consumption"].total == pytest.approx(50.0)


def test_daily_passed_through(forecast_payload):
    view = build_weather_view(forecast_payload)

    assert view.daily["time"] == forecast_payload["daily"]["time"]
    assert view.daily["temperature_max"] == forecast_payload["daily"]["temperature_2m_max"]
    assert view.daily["weather_codes"] == forecast_payload["daily"]["weather_code"]


def test_model_is_applied(forecast_payload):
    model = EnergyModel(optimal_temperature=25)
    view = build_weather_view(forecast_payload, model)
    assert view.current_energy.hvac == pytest.approx(62.5)


def test_as_dict_shape(forecast_payload):
    data = build_weather_view(forecast_payload).as_dict()

    assert set(data) == {"current", "energy", "hourly", "daily"}
    assert data["energy"]["current"] == {"hvac": 50.0, "lighting": 0.0, "total": 50.0}
    assert data["energy"]["forecast_24h"][0]["consumption"]["total"] == 107.0


def test_too_few_hourly_entries(forecast_payload):
    """Test 23 hourly entries is rejected."""
    payload = copy.deepcopy(forecast_payload)
    payload["hourly"]["wind_speed_10m"] = payload["hourly"]["wind_speed_10m"][:23]

    with pytest.raises(MalformedUpstreamDataError) as exc_info:
        build_weather_view(payload)
    assert exc_info.value.field == "hourly.wind_speed_10m"


@pytest.mark.parametrize("section", ["current", "hourly", "daily"])
def test_missing_section(forecast_payload, section):
    payload = copy.deepcopy(forecast_payload)
    del payload[section]

    with pytest.raises(MalformedUpstreamDataError):
        build_weather_view(payload)


def test_missing_hourly_array(forecast_payload):
    payload = copy.deepcopy(forecast_payload)
    del payload["hourly"]["dew_point_2m"]

    with pytest.raises(MalformedUpstreamDataError, match="dew_point_2m"):
        build_weather_view(payload)


def test_daily_length_mismatch(forecast_payload):
    payload = copy.deepcopy(forecast_payload)
    payload["daily"]["sunset"] = payload["daily"]["sunset"][:3]

    with pytest.raises(MalformedUpstreamDataError, match="daily.sunset"):
        build_weather_view(payload)


def test_non_numeric_energy_input(forecast_payload):
    payload = copy.deepcopy(forecast_payload)
    payload["hourly"]["cloud_cover"][5] = None

    with pytest.raises(MalformedUpstreamDataError, match=r"hourly.cloud_cover\[5\]"):
        build_weather_view(payload)


def test_non_numeric_current_input(forecast_payload):
    payload = copy.deepcopy(forecast_payload)
    payload["current"]["temperature_2m"] = "warm"

    with pytest.raises(MalformedUpstreamDataError):
        build_weather_view(payload)


def test_weather_code_fallback():
    assert describe_weather_code(0).description == "Clear sky"
    assert describe_weather_code("95").description == "Thunderstorm"
    assert describe_weather_code(42) is UNKNOWN_CONDITION
    assert describe_weather_code(None) is UNKNOWN_CONDITION
