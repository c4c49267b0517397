"""Tests for the weather-driven energy estimate."""

from __future__ import annotations

import pytest

from building_telemetry.const import DEFAULT_ENERGY_MODEL
from building_telemetry.models import EnergyModel, WeatherSnapshot
from building_telemetry.services.energy import estimate, estimate_snapshot


def test_baseline_conditions():
    """Test optimum temperature, in-band humidity, no cloud and no wind."""
    result = estimate(20, 50, 0, 0, DEFAULT_ENERGY_MODEL)

    assert result.hvac == pytest.approx(50.0)
    assert result.lighting == pytest.approx(0.0)
    assert result.total == pytest.approx(50.0)


def test_all_adjustments_applied():
    """Test temperature, humidity, cloud and wind adjustments together."""
    result = estimate(30, 80, 100, 20, DEFAULT_ENERGY_MODEL)

    assert result.hvac == pytest.approx(82.0)
    assert result.lighting == pytest.approx(25.0)
    assert result.total == pytest.approx(107.0)


@pytest.mark.parametrize(
    ("humidity", "expected_hvac"),
    [(29.9, 65.0), (30, 50.0), (70, 50.0), (70.1, 65.0)],
)
def test_humidity_thresholds_are_exclusive(humidity, expected_hvac):
    assert estimate(20, humidity, 0, 0).hvac == pytest.approx(expected_hvac)


def test_wind_threshold_is_exclusive():
    assert estimate(20, 50, 0, 15).hvac == pytest.approx(50.0)
    assert estimate(20, 50, 0, 15.1).hvac == pytest.approx(42.0)


def test_cold_temperature_uses_absolute_difference():
    assert estimate(10, 50, 0, 0).hvac == pytest.approx(75.0)


def test_values_rounded_to_one_decimal():
    result = estimate(20.33, 50, 33, 0)

    assert result.hvac == pytest.approx(50.8)
    assert result.lighting == pytest.approx(8.3)
    assert result.total == pytest.approx(59.1)


def test_custom_model():
    model = EnergyModel.from_mapping({"optimal_temperature": 22, "max_lighting_consumption": 40, "unknown": 1})

    result = estimate(22, 50, 50, 0, model)

    assert result.hvac == pytest.approx(50.0)
    assert result.lighting == pytest.approx(20.0)


def test_estimate_snapshot():
    snapshot = WeatherSnapshot(temperature=30, humidity=80, cloud_cover=100, wind_speed=20)
    assert estimate_snapshot(snapshot).total == pytest.approx(107.0)
